# app/core/budget.py

"""
Agregación de presupuestos: gastado, asignado y restante por mes y por categoría.

El cálculo es bajo demanda sobre la lista de transacciones que se le pase;
no hay acumulados guardados. Los meses se comparan por año y mes de
calendario, nunca por ventanas de 30 días.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from dateutil.relativedelta import relativedelta

from app.models.budget import CategoryBudget, MonthlyBudget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction

ZERO = Decimal("0")
CategoryRef = Union[Category, int, None]


def _money(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _category_id(category: CategoryRef) -> Optional[int]:
    if category is None or isinstance(category, int):
        return category
    return category.id


def start_of_month(value: datetime) -> datetime:
    return datetime(value.year, value.month, 1)


def next_month_start(value: datetime) -> datetime:
    return start_of_month(value) + relativedelta(months=1)


def same_month(a: datetime, b: datetime) -> bool:
    return a.year == b.year and a.month == b.month


def _total(transactions: Iterable[Transaction]) -> Decimal:
    return sum((_money(t.amount) for t in transactions), ZERO)


def _of_kind(
    transactions: Iterable[Transaction], type_: TransactionType, month: datetime
) -> List[Transaction]:
    return [t for t in transactions if t.type == type_ and same_month(t.date, month)]


def spent_for_category(
    category: CategoryRef, month: datetime, transactions: Iterable[Transaction]
) -> Decimal:
    category_id = _category_id(category)
    return _total(
        t for t in _of_kind(transactions, TransactionType.expense, month)
        if t.category_id == category_id
    )


def spent_for_month(month: datetime, transactions: Iterable[Transaction]) -> Decimal:
    return _total(_of_kind(transactions, TransactionType.expense, month))


def income_for_month(month: datetime, transactions: Iterable[Transaction]) -> Decimal:
    return _total(_of_kind(transactions, TransactionType.income, month))


def category_spent(category_budget: CategoryBudget, transactions: Iterable[Transaction]) -> Decimal:
    return spent_for_category(category_budget.category_id, category_budget.month, transactions)


def category_remaining(category_budget: CategoryBudget, transactions: Iterable[Transaction]) -> Decimal:
    return _money(category_budget.allocated_amount) - category_spent(category_budget, transactions)


def category_usage_percent(category_budget: CategoryBudget, transactions: Iterable[Transaction]) -> float:
    """Porcentaje usado; sin tope en 100, quien lo muestra decide cómo pintarlo."""
    allocated = _money(category_budget.allocated_amount)
    if allocated == 0:
        return 0.0
    return float(category_spent(category_budget, transactions) / allocated * 100)


def monthly_remaining(monthly_budget: MonthlyBudget, transactions: Iterable[Transaction]) -> Decimal:
    # Puede ser negativo: pasarse del presupuesto es un estado válido
    return _money(monthly_budget.total_budget) - spent_for_month(monthly_budget.month, transactions)


def _belongs_to(allocation: CategoryBudget, monthly_budget: MonthlyBudget) -> bool:
    if monthly_budget.id is not None and allocation.monthly_budget_id is not None:
        return allocation.monthly_budget_id == monthly_budget.id
    return same_month(allocation.month, monthly_budget.month)


def allocations_for(
    monthly_budget: MonthlyBudget, allocations: Iterable[CategoryBudget]
) -> List[CategoryBudget]:
    return [a for a in allocations if _belongs_to(a, monthly_budget)]


def allocated_total(monthly_budget: MonthlyBudget, allocations: Iterable[CategoryBudget]) -> Decimal:
    return sum((_money(a.allocated_amount) for a in allocations_for(monthly_budget, allocations)), ZERO)


def remaining_to_allocate(monthly_budget: MonthlyBudget, allocations: Iterable[CategoryBudget]) -> Decimal:
    # Negativo = sobreasignación: se avisa, nunca se bloquea
    return _money(monthly_budget.total_budget) - allocated_total(monthly_budget, allocations)


@dataclass
class AllocationStatus:
    category_id: int
    allocated: Decimal
    spent: Decimal
    remaining: Decimal
    usage_percent: float
    category_name: Optional[str] = None


@dataclass
class BudgetOverview:
    month: datetime
    total_budget: Decimal
    allocated: Decimal
    remaining_to_allocate: Decimal
    spent: Decimal
    remaining: Decimal
    over_allocated: bool
    over_budget: bool
    allocations: List[AllocationStatus] = field(default_factory=list)


def budget_overview(
    monthly_budget: MonthlyBudget,
    allocations: Iterable[CategoryBudget],
    transactions: Iterable[Transaction],
    categories: Iterable[Category] = (),
) -> BudgetOverview:
    transactions = list(transactions)
    own = allocations_for(monthly_budget, allocations)
    names = {c.id: c.name for c in categories}

    to_allocate = remaining_to_allocate(monthly_budget, own)
    remaining = monthly_remaining(monthly_budget, transactions)
    rows = [
        AllocationStatus(
            category_id=a.category_id,
            category_name=names.get(a.category_id),
            allocated=_money(a.allocated_amount),
            spent=category_spent(a, transactions),
            remaining=category_remaining(a, transactions),
            usage_percent=category_usage_percent(a, transactions),
        )
        for a in own
    ]
    rows.sort(key=lambda r: r.usage_percent, reverse=True)

    return BudgetOverview(
        month=start_of_month(monthly_budget.month),
        total_budget=_money(monthly_budget.total_budget),
        allocated=allocated_total(monthly_budget, own),
        remaining_to_allocate=to_allocate,
        spent=spent_for_month(monthly_budget.month, transactions),
        remaining=remaining,
        over_allocated=to_allocate < 0,
        over_budget=remaining < 0,
        allocations=rows,
    )


@dataclass
class CategoryTotal:
    category_id: Optional[int]
    category_name: Optional[str]
    total: Decimal
    percentage: float


@dataclass
class DailyTotal:
    date: date
    total_income: Decimal
    total_expense: Decimal


@dataclass
class MonthSummary:
    month: datetime
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    expense_by_category: List[CategoryTotal]
    income_by_category: List[CategoryTotal]
    daily_evolution: List[DailyTotal]
    overspending_alert: bool
    weekly_breakdown: List["PeriodTotal"] = field(default_factory=list)
    average_expense_per_day: Decimal = ZERO


def _by_category(
    data: Dict[Optional[int], Decimal], total: Decimal, names: Dict[int, str]
) -> List[CategoryTotal]:
    summaries = [
        CategoryTotal(
            category_id=cat_id,
            category_name=names.get(cat_id),
            total=amount,
            percentage=float(amount / total * 100) if total > 0 else 0.0,
        )
        for cat_id, amount in data.items()
    ]
    summaries.sort(key=lambda x: x.total, reverse=True)
    return summaries


def monthly_summary(
    month: datetime,
    transactions: Iterable[Transaction],
    categories: Iterable[Category] = (),
) -> MonthSummary:
    transactions = list(transactions)
    names = {c.id: c.name for c in categories}
    expense_by_category: Dict[Optional[int], Decimal] = defaultdict(lambda: ZERO)
    income_by_category: Dict[Optional[int], Decimal] = defaultdict(lambda: ZERO)
    daily = defaultdict(lambda: {"income": ZERO, "expense": ZERO})
    total_income = ZERO
    total_expense = ZERO

    for tx in transactions:
        if not same_month(tx.date, month):
            continue
        amount = _money(tx.amount)
        day = tx.date.date()
        if tx.type == TransactionType.income:
            total_income += amount
            income_by_category[tx.category_id] += amount
            daily[day]["income"] += amount
        else:
            total_expense += amount
            expense_by_category[tx.category_id] += amount
            daily[day]["expense"] += amount

    return MonthSummary(
        month=start_of_month(month),
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        expense_by_category=_by_category(expense_by_category, total_expense, names),
        income_by_category=_by_category(income_by_category, total_income, names),
        daily_evolution=[
            DailyTotal(date=d, total_income=v["income"], total_expense=v["expense"])
            for d, v in sorted(daily.items())
        ],
        overspending_alert=total_expense > total_income,
        weekly_breakdown=weekly_breakdown(month, transactions),
        average_expense_per_day=average_per_day(total_expense, start_of_month(month), next_month_start(month)),
    )


@dataclass
class PeriodTotal:
    label: str
    start: datetime
    end: datetime
    income: Decimal
    expenses: Decimal
    savings: Decimal


def _period(label: str, start: datetime, end: datetime, transactions: Iterable[Transaction]) -> PeriodTotal:
    """Totales de [start, end). Ahorro = ingresos - gastos, puede ser negativo."""
    inside = [t for t in transactions if start <= t.date < end]
    income = _total(t for t in inside if t.type == TransactionType.income)
    expenses = _total(t for t in inside if t.type == TransactionType.expense)
    return PeriodTotal(label=label, start=start, end=end, income=income, expenses=expenses, savings=income - expenses)


def average_per_day(total: Decimal, start: datetime, end: datetime) -> Decimal:
    days = max(1, (end.date() - start.date()).days)
    return (_money(total) / days).quantize(Decimal("0.01"))


def weekly_breakdown(month: datetime, transactions: Iterable[Transaction]) -> List[PeriodTotal]:
    """
    Semanas de 7 días contadas desde el día 1; la última se corta en el fin
    de mes. Como mucho 6 semanas.
    """
    transactions = list(transactions)
    start = start_of_month(month)
    end = next_month_start(month)
    weeks = []
    week_start = start
    while week_start < end and len(weeks) < 6:
        week_end = min(week_start + timedelta(days=7), end)
        weeks.append(_period(f"Semana {len(weeks) + 1}", week_start, week_end, transactions))
        week_start = week_end
    return weeks


@dataclass
class YearSummary:
    year: int
    total_income: Decimal
    total_expense: Decimal
    balance: Decimal
    average_expense_per_day: Decimal
    months: List[PeriodTotal]


def yearly_summary(year: int, transactions: Iterable[Transaction]) -> YearSummary:
    """Los 12 meses del año, también los que no tienen movimientos."""
    transactions = list(transactions)
    months = []
    for number in range(1, 13):
        start = datetime(year, number, 1)
        months.append(_period(f"{year}-{number:02d}", start, next_month_start(start), transactions))

    total_income = sum((m.income for m in months), ZERO)
    total_expense = sum((m.expenses for m in months), ZERO)
    return YearSummary(
        year=year,
        total_income=total_income,
        total_expense=total_expense,
        balance=total_income - total_expense,
        average_expense_per_day=average_per_day(total_expense, datetime(year, 1, 1), datetime(year + 1, 1, 1)),
        months=months,
    )


def account_balance(account_id: int, transactions: Iterable[Transaction]) -> Decimal:
    balance = ZERO
    for tx in transactions:
        if tx.account_id != account_id:
            continue
        if tx.type == TransactionType.income:
            balance += _money(tx.amount)
        else:
            balance -= _money(tx.amount)
    return balance
