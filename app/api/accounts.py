from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.core.budget import account_balance
from app.database import get_session
from app.models.account import Account
from app.models.transaction import Transaction
from app.schemas.account import AccountCreate, AccountRead
from app.store import Store

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _to_read(account: Account, transactions: List[Transaction]) -> AccountRead:
    return AccountRead(
        **account.model_dump(),
        display_name=account.display_name,
        balance=account_balance(account.id, transactions),
        transaction_count=sum(1 for t in transactions if t.account_id == account.id),
    )


@router.post("", response_model=AccountRead)
@router.post("/", response_model=AccountRead)
def create_account(data: AccountCreate, session: Session = Depends(get_session)):
    store = Store(session)
    account = store.insert(Account(**data.model_dump()))
    store.commit()
    return _to_read(store.refresh(account), [])


@router.get("", response_model=List[AccountRead])
@router.get("/", response_model=List[AccountRead])
def list_accounts(session: Session = Depends(get_session)):
    store = Store(session)
    transactions = store.query(Transaction, Transaction.account_id.is_not(None))
    return [_to_read(a, transactions) for a in store.query(Account, order_by=Account.name)]


@router.delete("/{account_id}")
def delete_account(account_id: int, session: Session = Depends(get_session)):
    """Elimina la cuenta; sus transacciones quedan sin cuenta asociada."""
    store = Store(session)
    account = store.get(Account, account_id)
    if not account:
        raise HTTPException(status_code=404, detail="Cuenta no encontrada")

    store.delete(account)
    store.commit()
    return {"detail": "Cuenta eliminada correctamente"}
