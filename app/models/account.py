from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from app.models.enums import AccountType

class Account(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    account_type: AccountType = Field(default=AccountType.debit_card)
    color_hex: str = Field(default="219EBC")
    last_four_digits: Optional[str] = None
    created_date: datetime = Field(default_factory=datetime.now, sa_type=DateTime(timezone=False))

    @property
    def display_name(self) -> str:
        if self.last_four_digits:
            return f"{self.name} ••••{self.last_four_digits}"
        return self.name
