# app/models/budget.py

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

class MonthlyBudget(SQLModel, table=True):
    __tablename__ = "monthly_budget"
    __table_args__ = (
        UniqueConstraint("month", name="uq_monthly_budget_month"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    total_budget: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    month: datetime = Field(sa_type=DateTime(timezone=False))  # primer día del mes, 00:00

class CategoryBudget(SQLModel, table=True):
    __tablename__ = "category_budget"
    __table_args__ = (
        UniqueConstraint("month", "category_id", name="uq_category_budget_month_category"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    allocated_amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    month: datetime = Field(sa_type=DateTime(timezone=False))  # duplicado del presupuesto padre para poder filtrar directo
    category_id: int = Field(foreign_key="category.id", index=True)
    monthly_budget_id: Optional[int] = Field(default=None, foreign_key="monthly_budget.id", index=True)
