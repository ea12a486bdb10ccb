from app.models.enums import TransactionType

# (nombre, icono SF Symbol, color hex)
DEFAULT_EXPENSE_CATEGORIES = [
    ("Bills & Utilities", "doc.text.fill", "BB8FCE"),
    ("Food & Dining", "fork.knife", "FF6B6B"),
    ("Healthcare", "heart.fill", "F1948A"),
    ("Personal Care", "person.fill", "F8C471"),
    ("Shopping", "bag.fill", "45B7D1"),
    ("Entertainment", "gamecontroller.fill", "F7DC6F"),
    ("Transportation", "car.fill", "4ECDC4"),
    ("Education", "book.fill", "85C1E9"),
    ("Travel", "airplane", "82E0AA"),
]

DEFAULT_INCOME_CATEGORIES = [
    ("Salary", "banknote.fill", "58D68D"),
    ("Freelance", "laptopcomputer", "5DADE2"),
    ("Investment", "chart.line.uptrend.xyaxis", "F7DC6F"),
    ("Business", "building.2.fill", "AF7AC5"),
    ("Bonus", "gift.fill", "FF9F43"),
    ("Rental", "house.fill", "54A0FF"),
]

DEFAULT_CATEGORIES = (
    [(name, icon, color, TransactionType.expense) for name, icon, color in DEFAULT_EXPENSE_CATEGORIES]
    + [(name, icon, color, TransactionType.income) for name, icon, color in DEFAULT_INCOME_CATEGORIES]
)
