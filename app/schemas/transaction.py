from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from decimal import Decimal
from app.models.enums import TransactionType

class TransactionCreate(BaseModel):
    name: str
    amount: Decimal
    type: TransactionType
    date: Optional[datetime] = None
    notes: Optional[str] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None

class TransactionRead(BaseModel):
    id: int
    name: str
    amount: Decimal
    type: TransactionType
    date: datetime
    notes: Optional[str] = None
    category_id: Optional[int] = None
    account_id: Optional[int] = None
    recurring_subscription_id: Optional[int] = None
    is_recurring: bool

    model_config = ConfigDict(from_attributes=True)

class TransactionCategoryUpdate(BaseModel):
    category_id: Optional[int] = None
