from datetime import date, datetime
from decimal import Decimal

from app.core.budget import (
    account_balance,
    allocated_total,
    average_per_day,
    budget_overview,
    category_remaining,
    category_usage_percent,
    income_for_month,
    monthly_remaining,
    monthly_summary,
    next_month_start,
    remaining_to_allocate,
    same_month,
    spent_for_category,
    spent_for_month,
    start_of_month,
    weekly_breakdown,
    yearly_summary,
)
from app.models.budget import CategoryBudget, MonthlyBudget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction

FOOD = Category(id=1, name="Food", type=TransactionType.expense)
RENT = Category(id=2, name="Rent", type=TransactionType.expense)
SALARY = Category(id=3, name="Salary", type=TransactionType.income)
MARCH = datetime(2025, 3, 1)


def expense(amount, when, category=FOOD, **kwargs):
    return Transaction(
        name="gasto", amount=Decimal(amount), date=when,
        type=TransactionType.expense, category_id=category.id, **kwargs,
    )


def income(amount, when, category=SALARY, **kwargs):
    return Transaction(
        name="ingreso", amount=Decimal(amount), date=when,
        type=TransactionType.income, category_id=category.id, **kwargs,
    )


def march_transactions():
    return [
        expense("70", datetime(2025, 3, 3)),
        expense("50", datetime(2025, 3, 20)),
        expense("400", datetime(2025, 3, 1), category=RENT),
        income("2500", datetime(2025, 3, 1)),
        expense("999", datetime(2025, 2, 28)),
    ]


def test_month_helpers():
    assert start_of_month(datetime(2025, 3, 17, 10)) == MARCH
    assert next_month_start(datetime(2025, 12, 5)) == datetime(2026, 1, 1)
    assert same_month(datetime(2025, 3, 31, 23), datetime(2025, 3, 1))
    assert not same_month(datetime(2024, 3, 1), datetime(2025, 3, 1))


def test_food_budget_scenario():
    budget = MonthlyBudget(id=1, total_budget=Decimal("1000"), month=MARCH)
    food = CategoryBudget(allocated_amount=Decimal("300"), month=MARCH, category_id=FOOD.id, monthly_budget_id=1)
    txs = march_transactions()[:2]

    assert spent_for_category(FOOD, MARCH, txs) == Decimal("120")
    assert category_usage_percent(food, txs) == 40.0
    assert monthly_remaining(budget, txs) == Decimal("880")


def test_monthly_remaining_counts_every_expense_of_the_month():
    budget = MonthlyBudget(total_budget=Decimal("1000"), month=MARCH)
    txs = march_transactions()

    assert spent_for_month(MARCH, txs) == Decimal("520")
    assert monthly_remaining(budget, txs) == budget.total_budget - spent_for_month(budget.month, txs)
    assert monthly_remaining(budget, txs) == Decimal("480")


def test_monthly_remaining_can_be_negative():
    budget = MonthlyBudget(total_budget=Decimal("100"), month=MARCH)
    assert monthly_remaining(budget, march_transactions()) == Decimal("-420")


def test_month_boundaries_are_calendar_months():
    txs = [
        expense("10", datetime(2025, 3, 31, 23, 59, 59, 999999)),
        expense("20", datetime(2025, 4, 1, 0, 0)),
        expense("40", datetime(2025, 2, 28, 23, 59, 59)),
    ]
    assert spent_for_category(FOOD, MARCH, txs) == Decimal("10")
    assert spent_for_month(datetime(2025, 3, 15), txs) == Decimal("10")


def test_spent_ignores_income_and_other_categories():
    txs = march_transactions()
    assert spent_for_category(RENT.id, MARCH, txs) == Decimal("400")
    assert spent_for_category(SALARY, MARCH, txs) == Decimal("0")
    assert income_for_month(MARCH, txs) == Decimal("2500")


def test_empty_inputs_are_zero_not_errors():
    assert spent_for_category(FOOD, MARCH, []) == Decimal("0")
    assert spent_for_month(MARCH, []) == Decimal("0")


def test_usage_percent_zero_allocation_and_over_budget():
    empty = CategoryBudget(allocated_amount=Decimal("0"), month=MARCH, category_id=FOOD.id)
    small = CategoryBudget(allocated_amount=Decimal("60"), month=MARCH, category_id=FOOD.id)
    txs = march_transactions()

    assert category_usage_percent(empty, txs) == 0
    assert category_usage_percent(small, txs) == 200.0
    assert category_remaining(small, txs) == Decimal("-60")


def test_over_allocation_is_reported_not_rejected():
    budget = MonthlyBudget(id=1, total_budget=Decimal("1000"), month=MARCH)
    allocations = [
        CategoryBudget(allocated_amount=Decimal("600"), month=MARCH, category_id=FOOD.id, monthly_budget_id=1),
        CategoryBudget(allocated_amount=Decimal("500"), month=MARCH, category_id=RENT.id, monthly_budget_id=1),
        CategoryBudget(allocated_amount=Decimal("900"), month=datetime(2025, 4, 1), category_id=FOOD.id, monthly_budget_id=2),
    ]

    assert allocated_total(budget, allocations) == Decimal("1100")
    assert remaining_to_allocate(budget, allocations) == Decimal("-100")


def test_allocated_total_matches_by_month_for_unsaved_budgets():
    budget = MonthlyBudget(total_budget=Decimal("500"), month=MARCH)
    allocations = [
        CategoryBudget(allocated_amount=Decimal("200"), month=MARCH, category_id=FOOD.id),
        CategoryBudget(allocated_amount=Decimal("300"), month=datetime(2025, 4, 1), category_id=FOOD.id),
    ]
    assert allocated_total(budget, allocations) == Decimal("200")
    assert remaining_to_allocate(budget, allocations) == Decimal("300")


def test_budget_overview():
    budget = MonthlyBudget(id=1, total_budget=Decimal("500"), month=MARCH)
    allocations = [
        CategoryBudget(allocated_amount=Decimal("300"), month=MARCH, category_id=FOOD.id, monthly_budget_id=1),
        CategoryBudget(allocated_amount=Decimal("350"), month=MARCH, category_id=RENT.id, monthly_budget_id=1),
    ]

    overview = budget_overview(budget, allocations, march_transactions(), [FOOD, RENT])

    assert overview.allocated == Decimal("650")
    assert overview.remaining_to_allocate == Decimal("-150")
    assert overview.over_allocated
    assert overview.spent == Decimal("520")
    assert overview.remaining == Decimal("-20")
    assert overview.over_budget
    rent, food = overview.allocations
    assert (rent.category_name, rent.spent, rent.remaining) == ("Rent", Decimal("400"), Decimal("-50"))
    assert (food.category_name, food.usage_percent) == ("Food", 40.0)


def test_monthly_summary():
    summary = monthly_summary(MARCH, march_transactions(), [FOOD, RENT, SALARY])

    assert summary.total_income == Decimal("2500")
    assert summary.total_expense == Decimal("520")
    assert summary.balance == Decimal("1980")
    assert not summary.overspending_alert
    assert [c.category_name for c in summary.expense_by_category] == ["Rent", "Food"]
    assert summary.income_by_category[0].percentage == 100.0
    assert [d.date for d in summary.daily_evolution] == [date(2025, 3, 1), date(2025, 3, 3), date(2025, 3, 20)]
    assert summary.daily_evolution[0].total_income == Decimal("2500")
    assert summary.daily_evolution[0].total_expense == Decimal("400")


def test_weekly_breakdown_clamps_last_week_to_month_end():
    weeks = weekly_breakdown(MARCH, march_transactions())

    assert [w.start.day for w in weeks] == [1, 8, 15, 22, 29]
    assert weeks[-1].end == datetime(2025, 4, 1)
    assert (weeks[0].income, weeks[0].expenses) == (Decimal("2500"), Decimal("470"))
    assert weeks[0].savings == Decimal("2030")
    assert weeks[2].expenses == Decimal("50")
    assert weeks[1].expenses == Decimal("0")
    # Febrero de 28 días: cuatro semanas exactas
    assert len(weekly_breakdown(datetime(2025, 2, 10), [])) == 4


def test_yearly_summary_covers_every_month():
    txs = march_transactions() + [expense("30", datetime(2025, 12, 31, 23, 59)), expense("5", datetime(2026, 1, 1))]
    summary = yearly_summary(2025, txs)

    assert len(summary.months) == 12
    assert summary.months[0].income == Decimal("0")
    assert summary.months[1].expenses == Decimal("999")
    assert summary.months[2].savings == Decimal("1980")
    assert summary.months[11].expenses == Decimal("30")
    assert summary.total_expense == Decimal("1549")
    assert summary.balance == Decimal("951")
    assert summary.average_expense_per_day == Decimal("4.24")


def test_average_per_day():
    assert average_per_day(Decimal("120"), MARCH, datetime(2025, 4, 1)) == Decimal("3.87")
    assert average_per_day(Decimal("10"), MARCH, MARCH) == Decimal("10.00")
    summary = monthly_summary(MARCH, march_transactions())
    assert summary.average_expense_per_day == Decimal("16.77")
    assert len(summary.weekly_breakdown) == 5


def test_account_balance():
    txs = [
        income("1000", MARCH, account_id=5),
        expense("250", MARCH, account_id=5),
        expense("80", MARCH, account_id=6),
    ]
    assert account_balance(5, txs) == Decimal("750")
    assert account_balance(6, txs) == Decimal("-80")
    assert account_balance(7, txs) == Decimal("0")
