from decimal import Decimal

import pytest

from app.core.errors import ValidationError
from app.core.validation import (
    ensure_category_matches_type,
    ensure_unique_category,
    normalize_category_name,
    validate_amount,
)
from app.models.category import Category
from app.models.enums import TransactionType

EXISTING = [
    Category(id=1, name="Food", type=TransactionType.expense),
    Category(id=2, name="Bonus", type=TransactionType.income),
]


def test_validate_amount():
    assert validate_amount(0) == Decimal("0")
    assert validate_amount("15.50") == Decimal("15.50")
    with pytest.raises(ValidationError):
        validate_amount(Decimal("-0.01"))
    with pytest.raises(ValidationError):
        validate_amount(None)


def test_duplicate_category_is_rejected():
    with pytest.raises(ValidationError):
        ensure_unique_category("Food", TransactionType.expense, EXISTING)
    with pytest.raises(ValidationError):
        ensure_unique_category("  Food ", TransactionType.expense, EXISTING)


def test_same_name_with_other_type_is_allowed():
    ensure_unique_category("Food", TransactionType.income, EXISTING)
    ensure_unique_category("Bonus", TransactionType.expense, EXISTING)


def test_renaming_a_category_does_not_clash_with_itself():
    ensure_unique_category("Food", TransactionType.expense, EXISTING, exclude_id=1)


def test_empty_name_is_rejected():
    assert normalize_category_name("  Travel ") == "Travel"
    with pytest.raises(ValidationError):
        normalize_category_name("   ")


def test_category_type_must_match_transaction_type():
    ensure_category_matches_type(EXISTING[0], TransactionType.expense)
    ensure_category_matches_type(None, TransactionType.income)
    with pytest.raises(ValidationError):
        ensure_category_matches_type(EXISTING[0], TransactionType.income)
