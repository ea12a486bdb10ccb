from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.models.enums import RecurrenceFrequency, TransactionType

class RecurringSubscription(SQLModel, table=True):
    __tablename__ = "recurring_subscription"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    frequency: RecurrenceFrequency
    start_date: datetime = Field(sa_type=DateTime(timezone=False))
    last_transaction_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=False))
    next_due_date: datetime = Field(index=True, sa_type=DateTime(timezone=False))
    is_active: bool = Field(default=True)
    type: TransactionType = Field(default=TransactionType.expense)
    notes: Optional[str] = None
    category_id: Optional[int] = Field(default=None, foreign_key="category.id", index=True)
