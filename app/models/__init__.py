# Importar todos los modelos registra sus tablas en SQLModel.metadata
from app.models.account import Account
from app.models.budget import CategoryBudget, MonthlyBudget
from app.models.category import Category
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction

__all__ = [
    "Account",
    "Category",
    "CategoryBudget",
    "MonthlyBudget",
    "RecurringSubscription",
    "Transaction",
]
