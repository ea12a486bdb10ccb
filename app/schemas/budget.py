from pydantic import BaseModel, ConfigDict
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

class CategoryAllocation(BaseModel):
    category_id: int
    allocated_amount: Decimal

class MonthlyBudgetSave(BaseModel):
    total_budget: Decimal
    allocations: List[CategoryAllocation] = []

class AllocationStatusRead(BaseModel):
    category_id: int
    category_name: Optional[str] = None
    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    usage_percent: float

    model_config = ConfigDict(from_attributes=True)

class BudgetOverviewRead(BaseModel):
    month: datetime
    total_budget: Decimal
    allocated: Decimal
    remaining_to_allocate: Decimal
    spent: Decimal
    remaining: Decimal
    over_allocated: bool
    over_budget: bool
    allocations: List[AllocationStatusRead]

    model_config = ConfigDict(from_attributes=True)
