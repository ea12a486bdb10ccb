# app/core/validation.py

from decimal import Decimal
from typing import Iterable, Optional

from app.core.errors import ValidationError
from app.models.category import Category
from app.models.enums import TransactionType


def validate_amount(amount, field: str = "amount") -> Decimal:
    """Cero es válido; los negativos se rechazan (el signo lo lleva el tipo)."""
    if amount is None:
        raise ValidationError(f"El campo '{field}' es obligatorio.")
    value = Decimal(str(amount))
    if value < 0:
        raise ValidationError(f"El campo '{field}' no puede ser negativo.")
    return value


def normalize_category_name(name: str) -> str:
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("El nombre de la categoría no puede estar vacío.")
    return trimmed


def ensure_unique_category(
    name: str,
    type_: TransactionType,
    existing: Iterable[Category],
    exclude_id: Optional[int] = None,
) -> None:
    """
    Precondición de unicidad de (name, type) sobre las categorías dadas.
    `exclude_id` permite renombrar una categoría sin chocar consigo misma.
    """
    wanted = normalize_category_name(name)
    for category in existing:
        if exclude_id is not None and category.id == exclude_id:
            continue
        if category.type == type_ and category.name.strip() == wanted:
            raise ValidationError(
                f"Ya existe una categoría de tipo '{TransactionType(type_).value}' llamada '{wanted}'."
            )


def ensure_category_matches_type(category: Optional[Category], type_: TransactionType) -> None:
    if category is not None and category.type != type_:
        raise ValidationError(
            f"La categoría '{category.name}' es de tipo '{category.type.value}' y no admite '{TransactionType(type_).value}'."
        )
