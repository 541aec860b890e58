"""Shared pytest fixtures: fixed clock, in-memory ledgers, API client."""

from datetime import datetime

import pytest

from medcare.core.config import Settings
from medcare.core.context import in_memory_context
from medcare.db.store import MemoryStore
from medcare.services.appointment_ledger import AppointmentLedger
from medcare.services.billing_ledger import BillingLedger
from medcare.services.id_gen import IdGenerator
from medcare.services.room_registry import RoomRegistry


class FixedClock:
    """Callable clock the tests can move."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 1, 15, 8, 0))


@pytest.fixture
def ids(clock) -> IdGenerator:
    return IdGenerator(today=lambda: clock().date())


@pytest.fixture
def room_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def registry(room_store) -> RoomRegistry:
    return RoomRegistry(room_store)


@pytest.fixture
def appointments(clock, ids) -> AppointmentLedger:
    return AppointmentLedger(MemoryStore(), ids, clock=clock)


@pytest.fixture
def billing(clock, ids) -> BillingLedger:
    return BillingLedger(MemoryStore(), ids, clock=clock)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        PERSISTENCE_ENABLED=False,
        SEED_ROOMS=True,
        APPOINTMENT_CONFLICT_SECONDS=1800,
        BILLING_LOCK_CLOSED_BILLS=False,
        API_V1_STR="/api",
    )


@pytest.fixture
def context(test_settings, clock):
    return in_memory_context(test_settings, clock=clock)


@pytest.fixture
def client(context):
    from fastapi.testclient import TestClient

    from medcare.main import create_app

    with TestClient(create_app(context)) as c:
        yield c
