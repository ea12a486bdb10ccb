from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import Optional

from app.models.enums import AccountType

class AccountCreate(BaseModel):
    name: str
    account_type: AccountType = AccountType.debit_card
    color_hex: str = "219EBC"
    last_four_digits: Optional[str] = None

class AccountRead(BaseModel):
    id: int
    name: str
    account_type: AccountType
    color_hex: str
    last_four_digits: Optional[str] = None
    created_date: datetime
    display_name: str
    balance: Decimal = Decimal("0")
    transaction_count: int = 0

    model_config = ConfigDict(from_attributes=True)
