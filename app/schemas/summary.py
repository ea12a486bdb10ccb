# app/schemas/summary.py

from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

class CategorySummary(BaseModel):
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    total: Decimal
    percentage: float

    model_config = ConfigDict(from_attributes=True)

class DailySummary(BaseModel):
    date: date
    total_income: Decimal
    total_expense: Decimal

    model_config = ConfigDict(from_attributes=True)

class PeriodSummary(BaseModel):
    label: str
    start: datetime
    end: datetime
    income: Decimal
    expenses: Decimal
    savings: Decimal

    model_config = ConfigDict(from_attributes=True)

class SummaryResponse(BaseModel):
    month: datetime
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    expense_by_category: List[CategorySummary]
    income_by_category: List[CategorySummary]
    daily_evolution: List[DailySummary]
    overspending_alert: bool
    weekly_breakdown: List[PeriodSummary] = []
    average_expense_per_day: Decimal

    model_config = ConfigDict(from_attributes=True)

class YearSummaryResponse(BaseModel):
    year: int
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    average_expense_per_day: Decimal
    months: List[PeriodSummary]

    model_config = ConfigDict(from_attributes=True)
