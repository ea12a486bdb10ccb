# app/api/subscriptions.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.core.clock import Clock, get_clock
from app.core.recurrence import days_since_last, days_until_due, initial_next_due, is_due
from app.core.validation import ensure_category_matches_type, validate_amount
from app.database import get_session
from app.models.category import Category
from app.models.recurring_subscription import RecurringSubscription
from app.schemas.recurring_subscription import (
    RecurringSubscriptionCreate,
    RecurringSubscriptionRead,
    RecurringSubscriptionStatusRead,
)
from app.schemas.transaction import TransactionRead
from app.services.subscription_service import SubscriptionService, get_subscription_service
from app.store import Store

router = APIRouter(prefix="/recurring-subscriptions", tags=["recurring-subscriptions"])


def _with_status(subscription: RecurringSubscription, clock: Clock) -> RecurringSubscriptionStatusRead:
    now = clock.now()
    return RecurringSubscriptionStatusRead(
        **subscription.model_dump(),
        is_due=is_due(subscription, now),
        days_until_due=days_until_due(subscription, now),
        days_since_last_transaction=days_since_last(subscription, now),
    )


@router.post("", response_model=RecurringSubscriptionRead)
@router.post("/", response_model=RecurringSubscriptionRead)
def create_subscription(
    data: RecurringSubscriptionCreate,
    session: Session = Depends(get_session),
):
    """El primer vencimiento es una unidad de frecuencia después de la fecha de inicio."""
    store = Store(session)
    amount = validate_amount(data.amount)

    if data.category_id is not None:
        category = store.get(Category, data.category_id)
        if not category:
            raise HTTPException(status_code=400, detail="Categoría inválida")
        ensure_category_matches_type(category, data.type)

    subscription = store.insert(RecurringSubscription(
        **data.model_dump(exclude={"amount"}),
        amount=amount,
        next_due_date=initial_next_due(data.frequency, data.start_date),
    ))
    store.commit()
    return store.refresh(subscription)


@router.get("", response_model=List[RecurringSubscriptionStatusRead])
@router.get("/", response_model=List[RecurringSubscriptionStatusRead])
def list_subscriptions(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    subscriptions = Store(session).query(
        RecurringSubscription, order_by=RecurringSubscription.next_due_date
    )
    return [_with_status(s, clock) for s in subscriptions]


@router.get("/due", response_model=List[RecurringSubscriptionStatusRead])
def list_due_subscriptions(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    service: SubscriptionService = Depends(get_subscription_service),
):
    return [_with_status(s, clock) for s in service.due(session, clock.now())]


@router.post("/process-due", response_model=List[TransactionRead])
def process_due_subscriptions(
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    service: SubscriptionService = Depends(get_subscription_service),
):
    """Genera las transacciones de todas las suscripciones vencidas."""
    return service.process_due(session, clock.now())


@router.post("/{subscription_id}/toggle", response_model=RecurringSubscriptionStatusRead)
def toggle_subscription(
    subscription_id: int,
    session: Session = Depends(get_session),
    clock: Clock = Depends(get_clock),
    service: SubscriptionService = Depends(get_subscription_service),
):
    subscription = service.toggle(session, subscription_id, clock.now())
    return _with_status(subscription, clock)


@router.delete("/{subscription_id}")
def delete_subscription(
    subscription_id: int,
    session: Session = Depends(get_session),
):
    """Elimina la suscripción; las transacciones ya generadas se conservan."""
    store = Store(session)
    subscription = store.get(RecurringSubscription, subscription_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Suscripción no encontrada")

    store.delete(subscription)
    store.commit()
    return {"detail": "Suscripción eliminada correctamente"}
