"""Service test fixtures - lifecycle service over the in-memory repository double."""

import pytest

from usecase_hub.services.use_case_service import UseCaseService
from tests.services.fake_repository import InMemoryUseCaseRepository


@pytest.fixture
def fake_repository():
    return InMemoryUseCaseRepository()


@pytest.fixture
def fake_service(fake_repository, event_bus):
    return UseCaseService(fake_repository, event_bus)


@pytest.fixture
async def existing(fake_service, fake_repository, valid_payload, recorded_events):
    """One stored record; setup calls and events are cleared."""
    record = await fake_service.create(valid_payload)
    fake_repository.calls.clear()
    recorded_events.clear()
    return record
