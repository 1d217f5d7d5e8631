"""Pytest bootstrap configuration.

Point settings at an in-memory SQLite database before application modules are
imported, then provide an isolated store and publisher doubles per test.
"""
import os

os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DATABASE__AUTO_CREATE_TABLES", "false")
os.environ.setdefault("RABBITMQ__HOST", "localhost")

from datetime import datetime, timedelta, timezone
from functools import partial
from typing import Any

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from application.services.payment_service import PaymentLifecycleService
from infrastructure.models import Base
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


class RecordingPublisher:
    destination = "payments.requested"

    def __init__(self) -> None:
        self.published: list[dict[str, Any]] = []

    async def publish(self, payload: dict[str, Any]) -> None:
        self.published.append(payload)

    async def aclose(self) -> None:
        return None


class FailingPublisher:
    destination = "payments.requested"

    def __init__(self, exc: Exception) -> None:
        self.exc = exc
        self.attempts = 0

    async def publish(self, payload: dict[str, Any]) -> None:
        self.attempts += 1
        raise self.exc


class TickingClock:
    """Deterministic clock: every call advances one second."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    # users belongs to another service; tests create it to exercise the join
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
def uow_factory(session_factory):
    return partial(SQLAlchemyUnitOfWork, session_factory)


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def service(uow_factory, publisher, clock) -> PaymentLifecycleService:
    return PaymentLifecycleService(uow_factory=uow_factory, publisher=publisher, clock=clock)


@pytest.fixture
def app(uow_factory, publisher, clock):
    from api.dependencies import get_payment_service
    from main import app as fastapi_app

    fastapi_app.dependency_overrides[get_payment_service] = lambda: PaymentLifecycleService(
        uow_factory=uow_factory, publisher=publisher, clock=clock
    )
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def broker_down() -> FailingPublisher:
    from domain.common.exceptions import BrokerUnavailableException

    return FailingPublisher(BrokerUnavailableException("payments.requested", reason="AMQPConnectionError"))


@pytest.fixture
def make_service(uow_factory, clock):
    def _make(publisher) -> PaymentLifecycleService:
        return PaymentLifecycleService(uow_factory=uow_factory, publisher=publisher, clock=clock)

    return _make


@pytest.fixture
def use_publisher(app, make_service):
    """Swap the publisher the routes receive for the rest of the test."""
    from api.dependencies import get_payment_service

    def _use(publisher) -> None:
        app.dependency_overrides[get_payment_service] = lambda: make_service(publisher)

    return _use
