from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.models.enums import TransactionType

class Transaction(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = ""
    # Hora local sin zona horaria
    date: datetime = Field(default_factory=datetime.now, index=True, sa_type=DateTime(timezone=False))
    # Siempre >= 0: el signo lo da `type`, nunca el monto
    amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    type: TransactionType = Field(default=TransactionType.expense)
    notes: Optional[str] = None

    # Referencias débiles; las cascadas las ejecuta app/store.py
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", index=True)
    recurring_subscription_id: Optional[int] = Field(
        default=None, foreign_key="recurring_subscription.id", index=True
    )
    account_id: Optional[int] = Field(default=None, foreign_key="account.id")

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.income

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.expense

    @property
    def is_recurring(self) -> bool:
        return self.recurring_subscription_id is not None
