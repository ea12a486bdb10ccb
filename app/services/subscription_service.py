# app/services/subscription_service.py

import logging
import threading
from datetime import datetime
from typing import List, Optional

from sqlmodel import Session

from app.core.config import REACTIVATION_POLICY
from app.core.errors import NotFoundError
from app.core.materializer import ReactivationPolicy, materialize, toggle_active
from app.core.recurrence import advance
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction
from app.store import Store

logger = logging.getLogger(__name__)


class SubscriptionService:
    """
    Materializa las suscripciones vencidas contra la base de datos.

    Dos disparos simultáneos (por ejemplo, dos pantallas que se activan a la
    vez) no pueden generar transacciones duplicadas: dentro del proceso las
    llamadas se serializan con un lock, y entre procesos cada suscripción se
    reclama con un compare-and-swap sobre next_due_date antes de crear la
    transacción.
    """

    def __init__(self, policy: Optional[ReactivationPolicy] = None):
        self._lock = threading.Lock()
        self.policy = ReactivationPolicy(policy or REACTIVATION_POLICY)

    def due(self, session: Session, now: datetime) -> List[RecurringSubscription]:
        return Store(session).query(
            RecurringSubscription,
            RecurringSubscription.is_active == True,  # noqa: E712
            RecurringSubscription.next_due_date <= now,
            order_by=RecurringSubscription.next_due_date,
        )

    def process_due(self, session: Session, now: datetime) -> List[Transaction]:
        with self._lock:
            store = Store(session)
            created = []
            for subscription in self.due(session, now):
                transaction = self._claim(store, subscription, now)
                if transaction is not None:
                    store.insert(transaction)
                    created.append(transaction)

            store.commit()
            for transaction in created:
                store.refresh(transaction)
            if created:
                logger.info("%d transacciones generadas por suscripciones", len(created))
            return created

    def _claim(
        self, store: Store, subscription: RecurringSubscription, now: datetime
    ) -> Optional[Transaction]:
        if subscription.amount is None or subscription.amount < 0:
            logger.warning("Suscripción %s omitida: monto inválido", subscription.id)
            return None

        swapped = store.compare_and_swap_schedule(
            subscription.id,
            observed_next_due=subscription.next_due_date,
            last_transaction_date=now,
            next_due_date=advance(subscription.frequency, now),
        )
        if not swapped:
            logger.warning(
                "Suscripción %s ya fue procesada por otra ejecución; se omite", subscription.id
            )
            return None
        # Mismos valores que el UPDATE condicional, ahora también en memoria
        return materialize(subscription, now)

    def toggle(self, session: Session, subscription_id: int, now: datetime) -> RecurringSubscription:
        with self._lock:
            store = Store(session)
            subscription = store.get(RecurringSubscription, subscription_id)
            if subscription is None:
                raise NotFoundError("Suscripción no encontrada")
            toggle_active(subscription, now, self.policy)
            store.insert(subscription)
            store.commit()
            return store.refresh(subscription)


subscription_service = SubscriptionService()


def get_subscription_service() -> SubscriptionService:
    return subscription_service
