"""
Pytest configuration and shared fixtures.

- In-memory repositories seeded with a small fleet and extras
- FastAPI TestClient over the in-memory bundle
"""

import pytest
from fastapi.testclient import TestClient

from booking_api.api.dependencies import _in_memory_bundle
from booking_api.application.draft_store import DraftStore
from booking_api.domain.entities import BookingDraft
from booking_api.infrastructure.in_memory import InMemoryDraftStorage
from booking_api.main import app
from tests.factories import make_details, make_extras, make_fleet


@pytest.fixture
def draft_store() -> DraftStore:
    return DraftStore(InMemoryDraftStorage())


@pytest.fixture
async def stored_draft(draft_store: DraftStore) -> BookingDraft:
    draft = BookingDraft(details=make_details())
    await draft_store.save(draft)
    return draft


@pytest.fixture
def memory_bundle():
    _in_memory_bundle.cache_clear()
    bundle = _in_memory_bundle()
    yield bundle
    _in_memory_bundle.cache_clear()


@pytest.fixture
def seeded_bundle(memory_bundle):
    for vehicle in make_fleet():
        memory_bundle["vehicle_repo"].add(vehicle)
    for extra in make_extras():
        memory_bundle["extra_repo"].add(extra)
    return memory_bundle


@pytest.fixture
def client(memory_bundle) -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
