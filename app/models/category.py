from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from typing import Optional

from app.models.enums import TransactionType

class Category(SQLModel, table=True):
    # Una categoría es de ingreso o de gasto, nunca ambas; (name, type) es único
    __table_args__ = (
        UniqueConstraint("name", "type", name="uq_category_name_type"),
    )
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True)
    icon_name: str = Field(default="questionmark.circle")  # nombre de SF Symbol
    color_hex: str = Field(default="0000FF")
    type: TransactionType = Field(default=TransactionType.expense)
