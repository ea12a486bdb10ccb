from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.models.enums import RecurrenceFrequency, TransactionType

class RecurringSubscriptionCreate(BaseModel):
    name: str
    amount: Decimal
    frequency: RecurrenceFrequency
    start_date: datetime
    type: TransactionType = TransactionType.expense
    notes: Optional[str] = None
    category_id: Optional[int] = None

class RecurringSubscriptionRead(BaseModel):
    id: int
    name: str
    amount: Decimal
    frequency: RecurrenceFrequency
    start_date: datetime
    last_transaction_date: Optional[datetime] = None
    next_due_date: datetime
    is_active: bool
    type: TransactionType
    notes: Optional[str] = None
    category_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)

class RecurringSubscriptionStatusRead(RecurringSubscriptionRead):
    is_due: bool
    days_until_due: int
    days_since_last_transaction: int
