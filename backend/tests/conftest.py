"""Root conftest - shared fixtures: in-memory SQLite store, bus, service, HTTP client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Route tests reach the service through dependency overrides, never a real Postgres
    - recorded_events captures every lifecycle event published during a test
"""

import copy
import os

# Never touch a real database from tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from httpx import ASGITransport, AsyncClient

from usecase_hub.api.deps import get_db_manager, get_use_case_service
from usecase_hub.core.domain_types import UseCaseEvent
from usecase_hub.db.base import Base
from usecase_hub.db.use_case_repository import SqlUseCaseRepository
from usecase_hub.infrastructure.database import DatabaseSessionManager
from usecase_hub.infrastructure.event_bus import EventBus
from usecase_hub.main import app
from usecase_hub.services.use_case_service import UseCaseService
import usecase_hub.models  # noqa: F401
from tests.payloads import VALID_PAYLOAD


@pytest.fixture
def valid_payload() -> dict:
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def repository(db_manager):
    return SqlUseCaseRepository(db_manager)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorded_events(event_bus):
    """List of envelopes for every lifecycle event published on event_bus."""
    events = []
    for event in UseCaseEvent:
        event_bus.subscribe(event.value, events.append)
    return events


@pytest.fixture
def service(repository, event_bus):
    return UseCaseService(repository, event_bus)


@pytest.fixture
async def client(db_manager, service):
    """FastAPI test client wired to the in-memory store."""
    app.dependency_overrides[get_use_case_service] = lambda: service
    app.dependency_overrides[get_db_manager] = lambda: db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
