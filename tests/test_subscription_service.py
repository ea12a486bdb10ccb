import threading
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import update
from sqlmodel import Session, create_engine

from app.core.errors import NotFoundError
from app.core.materializer import ReactivationPolicy
from app.database import create_db_and_tables
from app.models.enums import RecurrenceFrequency
from app.models.recurring_subscription import RecurringSubscription
from app.models.transaction import Transaction
from app.services.subscription_service import SubscriptionService
from app.store import Store


def add_subscription(session, **overrides):
    data = dict(
        name="Netflix", amount=Decimal("15.00"), frequency=RecurrenceFrequency.monthly,
        start_date=datetime(2025, 1, 1), next_due_date=datetime(2025, 2, 1),
    )
    data.update(overrides)
    subscription = RecurringSubscription(**data)
    session.add(subscription)
    session.commit()
    session.refresh(subscription)
    return subscription


def test_process_due_persists_transactions_and_schedule(session):
    sub = add_subscription(session)
    add_subscription(session, name="Later", next_due_date=datetime(2025, 5, 1))
    service = SubscriptionService()
    now = datetime(2025, 2, 2)

    created = service.process_due(session, now)

    assert [t.name for t in created] == ["Netflix"]
    assert created[0].id is not None
    assert created[0].recurring_subscription_id == sub.id
    session.expire_all()
    stored = session.get(RecurringSubscription, sub.id)
    assert stored.next_due_date == datetime(2025, 3, 2)
    assert stored.last_transaction_date == now


def test_process_due_twice_creates_one_transaction(session):
    add_subscription(session)
    service = SubscriptionService()
    now = datetime(2025, 2, 2)

    assert len(service.process_due(session, now)) == 1
    assert service.process_due(session, now) == []
    assert len(Store(session).query(Transaction)) == 1


def test_stale_schedule_is_not_materialized(session):
    sub = add_subscription(session)
    assert sub.next_due_date == datetime(2025, 2, 1)

    # Otro proceso mueve el calendario; la copia cargada en la sesión queda desactualizada
    session.execute(
        update(RecurringSubscription)
        .where(RecurringSubscription.id == sub.id)
        .values(next_due_date=datetime(2025, 2, 2))
        .execution_options(synchronize_session=False)
    )
    assert sub.next_due_date == datetime(2025, 2, 1)

    created = SubscriptionService().process_due(session, datetime(2025, 2, 10))

    assert created == []
    assert Store(session).query(Transaction) == []


def test_concurrent_triggers_do_not_duplicate(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'tracker.db'}", connect_args={"check_same_thread": False}
    )
    create_db_and_tables(engine)
    with Session(engine) as session:
        add_subscription(session)

    service = SubscriptionService()
    now = datetime(2025, 2, 2)
    results = []

    def trigger():
        with Session(engine) as session:
            results.append(len(service.process_due(session, now)))

    threads = [threading.Thread(target=trigger) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == [0, 0, 0, 1]
    with Session(engine) as session:
        assert len(Store(session).query(Transaction)) == 1
    engine.dispose()


def test_toggle_uses_configured_policy(session):
    sub = add_subscription(session, is_active=False)
    now = datetime(2025, 6, 15)

    toggled = SubscriptionService(ReactivationPolicy.fast_forward).toggle(session, sub.id, now)
    assert toggled.is_active
    assert toggled.next_due_date == datetime(2025, 7, 1)

    other = add_subscription(session, name="Spotify", is_active=False)
    toggled = SubscriptionService(ReactivationPolicy.catch_up).toggle(session, other.id, now)
    assert toggled.is_active
    assert toggled.next_due_date == datetime(2025, 2, 1)


def test_toggle_unknown_subscription(session):
    with pytest.raises(NotFoundError):
        SubscriptionService().toggle(session, 999, datetime(2025, 1, 1))
