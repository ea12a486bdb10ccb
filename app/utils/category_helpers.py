from typing import List, Optional

from sqlmodel import Session, select

from app.constants.categories import DEFAULT_CATEGORIES
from app.core.validation import ensure_unique_category, normalize_category_name
from app.models.category import Category
from app.models.enums import TransactionType


def get_or_create_category(
    session: Session,
    *,
    name: str,
    type_: TransactionType,
    icon_name: str = "questionmark.circle",
    color_hex: str = "0000FF",
) -> Category:
    """
    Busca por (nombre, tipo); si no existe, la crea.
    Idempotente por la restricción UNIQUE (name, type).
    """
    name = normalize_category_name(name)
    category = session.exec(
        select(Category).where(Category.name == name, Category.type == type_)
    ).first()
    if category:
        return category

    category = Category(name=name, type=type_, icon_name=icon_name, color_hex=color_hex)
    session.add(category)
    session.commit()
    session.refresh(category)
    return category


def create_default_categories(session: Session) -> List[Category]:
    """
    Crea el catálogo base de categorías de ingreso y gasto.
    Idempotente (seguro si se llama varias veces).
    """
    return [
        get_or_create_category(session, name=name, type_=type_, icon_name=icon, color_hex=color)
        for name, icon, color, type_ in DEFAULT_CATEGORIES
    ]


def check_category_available(
    session: Session, name: str, type_: TransactionType, exclude_id: Optional[int] = None
) -> str:
    """Valida unicidad contra las categorías guardadas; devuelve el nombre normalizado."""
    existing = session.exec(select(Category).where(Category.type == type_)).all()
    ensure_unique_category(name, type_, existing, exclude_id=exclude_id)
    return normalize_category_name(name)
