import pytest
from datetime import datetime
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from app.core.clock import FixedClock, get_clock
from app.core.recurrence import initial_next_due
from app.database import create_db_and_tables, get_session
from app.main import app
from app.models.enums import RecurrenceFrequency, TransactionType
from app.models.recurring_subscription import RecurringSubscription
from app.services.subscription_service import SubscriptionService, get_subscription_service


def make_subscription(**overrides) -> RecurringSubscription:
    data = dict(
        id=1,
        name="Netflix",
        amount=Decimal("15.00"),
        frequency=RecurrenceFrequency.monthly,
        start_date=datetime(2025, 1, 1),
        type=TransactionType.expense,
        category_id=7,
    )
    data.update(overrides)
    data.setdefault("next_due_date", initial_next_due(data["frequency"], data["start_date"]))
    return RecurringSubscription(**data)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 3, 15, 12, 0))


@pytest.fixture
def client(engine, clock):
    service = SubscriptionService()

    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_subscription_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
