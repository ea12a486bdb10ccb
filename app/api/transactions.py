from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session

from app.core.budget import next_month_start
from app.core.clock import Clock, get_clock
from app.core.errors import ValidationError
from app.core.validation import ensure_category_matches_type, validate_amount
from app.database import get_session
from app.models.account import Account
from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import Transaction
from app.schemas.transaction import TransactionCategoryUpdate, TransactionCreate, TransactionRead
from app.store import Store

router = APIRouter(prefix="/transactions", tags=["transactions"])


def parse_month(value: str) -> datetime:
    """'2025-03' -> datetime(2025, 3, 1)."""
    try:
        return datetime.strptime(value, "%Y-%m")
    except ValueError:
        raise ValidationError("El mes debe tener el formato AAAA-MM.")


def _category_for(store: Store, category_id: Optional[int], type_: TransactionType) -> Optional[Category]:
    if category_id is None:
        return None
    category = store.get(Category, category_id)
    if not category:
        raise HTTPException(status_code=400, detail="Categoría inválida")
    ensure_category_matches_type(category, type_)
    return category


@router.post("", response_model=TransactionRead)
@router.post("/", response_model=TransactionRead)
def create_transaction(
    transaction_data: TransactionCreate,
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    store = Store(session)
    amount = validate_amount(transaction_data.amount)
    _category_for(store, transaction_data.category_id, transaction_data.type)

    if transaction_data.account_id is not None and not store.get(Account, transaction_data.account_id):
        raise HTTPException(status_code=400, detail="Cuenta inválida")

    data = transaction_data.model_dump()
    if data.get("date") is None:
        data["date"] = clock.now()
    data["amount"] = amount

    transaction = store.insert(Transaction(**data))
    store.commit()
    return store.refresh(transaction)


@router.get("", response_model=List[TransactionRead])
@router.get("/", response_model=List[TransactionRead])
def list_transactions(
    month: Optional[str] = Query(None, description="Mes en formato AAAA-MM"),
    type: Optional[TransactionType] = Query(None),
    category_id: Optional[int] = Query(None),
    session: Session = Depends(get_session),
):
    criteria = []
    if month:
        start = parse_month(month)
        criteria += [Transaction.date >= start, Transaction.date < next_month_start(start)]
    if type:
        criteria.append(Transaction.type == type)
    if category_id is not None:
        criteria.append(Transaction.category_id == category_id)

    return Store(session).query(Transaction, *criteria, order_by=Transaction.date.desc())


@router.get("/{transaction_id}", response_model=TransactionRead)
def get_transaction(transaction_id: int, session: Session = Depends(get_session)):
    transaction = Store(session).get(Transaction, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transacción no encontrada")
    return transaction


@router.patch("/{transaction_id}/category", response_model=TransactionRead)
def reassign_category(
    transaction_id: int,
    data: TransactionCategoryUpdate,
    session: Session = Depends(get_session),
):
    """Único cambio permitido sobre una transacción ya creada."""
    store = Store(session)
    transaction = store.get(Transaction, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transacción no encontrada")

    _category_for(store, data.category_id, transaction.type)
    transaction.category_id = data.category_id
    store.insert(transaction)
    store.commit()
    return store.refresh(transaction)


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: int, session: Session = Depends(get_session)):
    store = Store(session)
    transaction = store.get(Transaction, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transacción no encontrada")

    store.delete(transaction)
    store.commit()
    return {"message": "Transacción eliminada correctamente"}
