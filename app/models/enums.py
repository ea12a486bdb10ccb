from enum import Enum

class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

class RecurrenceFrequency(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"

class AccountType(str, Enum):
    debit_card = "debit_card"
    cash = "cash"
    paypal = "paypal"
    credit_card = "credit_card"
