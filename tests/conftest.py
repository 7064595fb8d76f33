"""Root conftest — fresh substrate, stores and zero-latency services per test.

Invariants:
    - Every test gets its own InMemoryKeyValueStore and UserDirectory
    - Services built with SimulatedLatency.none(): no real sleeping
    - FakeClock hands out strictly increasing timestamps
    - GatedSleep holds a simulated pause open until the test releases it
"""

import asyncio
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from ticketapp.infrastructure.kv_store import InMemoryKeyValueStore
from ticketapp.services.auth_service import AuthService
from ticketapp.services.latency import SimulatedLatency
from ticketapp.services.ticket_service import TicketService
from ticketapp.stores.session_store import SessionStore
from ticketapp.stores.ticket_store import TicketStore
from ticketapp.stores.user_directory import UserDirectory


class FakeClock:
    """Returns start, start + step, start + 2*step, ... on successive calls."""

    def __init__(
        self,
        start: datetime = datetime(2026, 1, 1, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


class RecordingSleep:
    """Async sleep stand-in that records requested delays."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class GatedSleep:
    """Async sleep stand-in that blocks until released."""

    def __init__(self):
        self.entered = asyncio.Event()
        self._gate = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.entered.set()
        await self._gate.wait()

    def release(self) -> None:
        self._gate.set()


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def gated_sleep():
    return GatedSleep()


@pytest.fixture
def ticket_store(storage, clock):
    counter = itertools.count(100)
    return TicketStore(storage, clock=clock, id_factory=lambda: f"ticket_{next(counter)}")


@pytest.fixture
def session_store(storage):
    return SessionStore(storage)


@pytest.fixture
def users():
    return UserDirectory.with_demo_accounts()


@pytest.fixture
def auth_service(session_store, users):
    return AuthService(session_store, users, SimulatedLatency.none())


@pytest.fixture
def ticket_service(ticket_store):
    return TicketService(ticket_store, SimulatedLatency.none())


@pytest.fixture
def ticket_form():
    return {
        "title": "Fix login redirect",
        "description": "Users land on / after login instead of /dashboard",
        "status": "open",
        "priority": "high",
    }
