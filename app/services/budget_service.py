# app/services/budget_service.py

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from app.core.budget import (
    BudgetOverview,
    budget_overview,
    next_month_start,
    start_of_month,
)
from app.core.errors import ValidationError
from app.core.validation import validate_amount
from app.models.budget import CategoryBudget, MonthlyBudget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.store import Store


def find_budget(store: Store, month: datetime) -> Optional[MonthlyBudget]:
    found = store.query(MonthlyBudget, MonthlyBudget.month == start_of_month(month))
    return found[0] if found else None


def allocations_for_month(store: Store, month: datetime) -> List[CategoryBudget]:
    return store.query(CategoryBudget, CategoryBudget.month == start_of_month(month))


def transactions_for_month(store: Store, month: datetime) -> List[Transaction]:
    return store.query(
        Transaction,
        Transaction.date >= start_of_month(month),
        Transaction.date < next_month_start(month),
        order_by=Transaction.date,
    )


def transactions_for_year(store: Store, year: int) -> List[Transaction]:
    return store.query(
        Transaction,
        Transaction.date >= datetime(year, 1, 1),
        Transaction.date < datetime(year + 1, 1, 1),
        order_by=Transaction.date,
    )


def save_budget(
    store: Store,
    month: datetime,
    total: Decimal,
    allocations: Dict[int, Decimal],
) -> MonthlyBudget:
    """
    Crea o actualiza el presupuesto del mes y reemplaza todas sus asignaciones.

    Las asignaciones en cero se descartan. Que la suma supere el total no es
    un error: se informa en el resumen como sobreasignación.
    """
    month_start = start_of_month(month)
    total = validate_amount(total, "total_budget")
    cleaned = {
        category_id: validate_amount(amount, "allocated_amount")
        for category_id, amount in allocations.items()
    }

    for category_id in cleaned:
        category = store.get(Category, category_id)
        if category is None:
            raise ValidationError(f"Categoría {category_id} no existe.")
        if category.type != TransactionType.expense:
            raise ValidationError(f"La categoría '{category.name}' no es de gasto.")

    budget = find_budget(store, month_start)
    if budget is None:
        budget = MonthlyBudget(total_budget=total, month=month_start)
    else:
        budget.total_budget = total
    store.insert(budget)

    for existing in allocations_for_month(store, month_start):
        store.delete(existing)
    # Los DELETE deben llegar antes que los INSERT por la restricción única (month, category_id)
    store.flush()

    for category_id, amount in cleaned.items():
        if amount > 0:
            store.insert(CategoryBudget(
                allocated_amount=amount,
                month=month_start,
                category_id=category_id,
                monthly_budget_id=budget.id,
            ))

    store.commit()
    return store.refresh(budget)


def delete_budget(store: Store, month: datetime) -> bool:
    budget = find_budget(store, month)
    if budget is None:
        return False
    store.delete(budget)
    store.commit()
    return True


def load_overview(store: Store, month: datetime) -> Optional[BudgetOverview]:
    budget = find_budget(store, month)
    if budget is None:
        return None
    return budget_overview(
        budget,
        allocations_for_month(store, month),
        transactions_for_month(store, month),
        store.query(Category),
    )
