# app/api/categories.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.database import get_session
from app.models.budget import CategoryBudget
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.store import Store
from app.utils.category_helpers import check_category_available, create_default_categories

router = APIRouter(prefix="/categories", tags=["categories"])


def _is_referenced(store: Store, category_id: int) -> bool:
    # El tipo queda fijo en cuanto algo apunta a la categoría
    return bool(
        store.query(Transaction, Transaction.category_id == category_id)
        or store.query(RecurringSubscription, RecurringSubscription.category_id == category_id)
        or store.query(CategoryBudget, CategoryBudget.category_id == category_id)
    )


@router.post("", response_model=CategoryRead)
@router.post("/", response_model=CategoryRead)
def create_category(
    category_data: CategoryCreate,
    session: Session = Depends(get_session),
):
    """
    Crea una categoría. El par (nombre, tipo) debe ser único: la misma
    categoría puede existir como ingreso y como gasto, pero no dos veces
    con el mismo tipo.
    """
    name = check_category_available(session, category_data.name, category_data.type)

    store = Store(session)
    category = store.insert(Category(**category_data.model_dump(exclude={"name"}), name=name))
    store.commit()
    return store.refresh(category)


@router.get("", response_model=List[CategoryRead])
@router.get("/", response_model=List[CategoryRead])
def list_categories(
    type: Optional[TransactionType] = Query(None),
    session: Session = Depends(get_session),
):
    criteria = [Category.type == type] if type else []
    return Store(session).query(Category, *criteria, order_by=Category.name)


@router.post("/defaults", response_model=List[CategoryRead])
def seed_default_categories(session: Session = Depends(get_session)):
    """Crea el catálogo base. Idempotente."""
    return create_default_categories(session)


@router.put("/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: int,
    category_data: CategoryUpdate,
    session: Session = Depends(get_session),
):
    """
    Actualiza nombre, icono, color o tipo.
    No se permite cambiar el tipo si la categoría ya tiene transacciones,
    suscripciones recurrentes o asignaciones de presupuesto.
    """
    store = Store(session)
    category = store.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Categoría no encontrada")

    new_type = category_data.type or category.type
    new_name = category_data.name if category_data.name is not None else category.name

    if new_type != category.type and _is_referenced(store, category.id):
        raise HTTPException(
            status_code=400,
            detail="No puedes cambiar el tipo de esta categoría porque tiene transacciones, suscripciones o presupuestos asociados.",
        )

    category.name = check_category_available(session, new_name, new_type, exclude_id=category.id)
    category.type = new_type
    if category_data.icon_name is not None:
        category.icon_name = category_data.icon_name
    if category_data.color_hex is not None:
        category.color_hex = category_data.color_hex

    store.insert(category)
    store.commit()
    return store.refresh(category)


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    session: Session = Depends(get_session),
):
    """
    Elimina la categoría junto con sus transacciones, suscripciones
    recurrentes y asignaciones de presupuesto.
    """
    store = Store(session)
    category = store.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Categoría no encontrada")

    store.delete(category)
    store.commit()
    return {"message": "Categoría eliminada correctamente"}
