# app/core/materializer.py

"""
Materializador de suscripciones: convierte suscripciones vencidas en
transacciones concretas y adelanta su calendario.

Las funciones de este módulo solo mutan objetos en memoria; persistir el
estado (y serializar invocaciones concurrentes) es responsabilidad de
app/services/subscription_service.py.
"""

import logging
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from app.core.recurrence import advance, fast_forward, is_due
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction

logger = logging.getLogger(__name__)


class ReactivationPolicy(str, Enum):
    # Al reactivar, salta a la próxima ocurrencia posterior a "ahora"
    fast_forward = "fast_forward"
    # Al reactivar, deja next_due_date como está: el siguiente process_due genera una transacción
    catch_up = "catch_up"


def build_transaction(subscription: RecurringSubscription, as_of: datetime) -> Transaction:
    return Transaction(
        name=subscription.name,
        date=as_of,
        amount=subscription.amount,
        type=subscription.type,
        notes=subscription.notes,
        category_id=subscription.category_id,
        recurring_subscription_id=subscription.id,
    )


def advance_schedule(subscription: RecurringSubscription, as_of: datetime) -> None:
    subscription.last_transaction_date = as_of
    subscription.next_due_date = advance(subscription.frequency, as_of)


def materialize(subscription: RecurringSubscription, as_of: datetime) -> Transaction:
    """Crea la transacción de una suscripción y mueve next_due_date más allá de `as_of`."""
    transaction = build_transaction(subscription, as_of)
    advance_schedule(subscription, as_of)
    return transaction


def process_due(
    subscriptions: Iterable[RecurringSubscription], as_of: datetime
) -> List[Transaction]:
    created = []
    for subscription in subscriptions:
        if not is_due(subscription, as_of):
            continue
        if subscription.amount is None or subscription.amount < 0:
            logger.warning(
                "Suscripción %s (%s) omitida: monto inválido %s",
                subscription.id, subscription.name, subscription.amount,
            )
            continue
        created.append(materialize(subscription, as_of))
        logger.info(
            "Suscripción %s (%s) materializada; próximo vencimiento %s",
            subscription.id, subscription.name, subscription.next_due_date.isoformat(),
        )
    return created


def toggle_active(
    subscription: RecurringSubscription,
    as_of: datetime,
    policy: Optional[ReactivationPolicy] = None,
) -> RecurringSubscription:
    """
    Invierte `is_active`. Desactivar no toca el calendario; al reactivar,
    `policy` decide qué pasa con un next_due_date que quedó en el pasado.
    """
    policy = ReactivationPolicy(policy or ReactivationPolicy.fast_forward)
    subscription.is_active = not subscription.is_active

    if subscription.is_active and policy == ReactivationPolicy.fast_forward:
        subscription.next_due_date = fast_forward(subscription, as_of)
    return subscription
