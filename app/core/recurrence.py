# app/core/recurrence.py

"""
Motor de recurrencia: fechas de vencimiento de las suscripciones recurrentes.

Todas las funciones son puras y reciben el instante de referencia como
parámetro; ninguna consulta el reloj por su cuenta.
"""

from datetime import datetime
from typing import Iterable, List

from dateutil.relativedelta import relativedelta

from app.models.enums import RecurrenceFrequency
from app.models.recurring_subscription import RecurringSubscription

_STEPS = {
    RecurrenceFrequency.daily: relativedelta(days=1),
    RecurrenceFrequency.weekly: relativedelta(weeks=1),
    RecurrenceFrequency.monthly: relativedelta(months=1),
    RecurrenceFrequency.yearly: relativedelta(years=1),
}


def advance(frequency: RecurrenceFrequency, from_date: datetime) -> datetime:
    """
    Suma exactamente una unidad de calendario de `frequency` a `from_date`.

    Los meses cortos se ajustan al último día válido: 31 de enero + 1 mes
    es 28 (o 29) de febrero, y 29 de febrero + 1 año es 28 de febrero.
    La hora del día se conserva.
    """
    return from_date + _STEPS[RecurrenceFrequency(frequency)]


def initial_next_due(frequency: RecurrenceFrequency, start_date: datetime) -> datetime:
    return advance(frequency, start_date)


def is_due(subscription: RecurringSubscription, as_of: datetime) -> bool:
    return bool(subscription.is_active) and subscription.next_due_date <= as_of


def days_until_due(subscription: RecurringSubscription, as_of: datetime) -> int:
    # Diferencia en días de calendario; negativa si está vencida
    return (subscription.next_due_date.date() - as_of.date()).days


def days_since_last(subscription: RecurringSubscription, as_of: datetime) -> int:
    if subscription.last_transaction_date is None:
        return 0
    return (as_of.date() - subscription.last_transaction_date.date()).days


def due_subscriptions(
    subscriptions: Iterable[RecurringSubscription], as_of: datetime
) -> List[RecurringSubscription]:
    return [s for s in subscriptions if is_due(s, as_of)]


def has_due(subscriptions: Iterable[RecurringSubscription], as_of: datetime) -> bool:
    return any(is_due(s, as_of) for s in subscriptions)


def due_count(subscriptions: Iterable[RecurringSubscription], as_of: datetime) -> int:
    return len(due_subscriptions(subscriptions, as_of))


def fast_forward(subscription: RecurringSubscription, as_of: datetime) -> datetime:
    """Primera ocurrencia del calendario actual estrictamente posterior a `as_of`."""
    next_due = subscription.next_due_date
    while next_due <= as_of:
        next_due = advance(subscription.frequency, next_due)
    return next_due
