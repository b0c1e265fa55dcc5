"""Pytest fixtures for sheet-gateway tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from sheet_gateway_api.app.core import clock
from sheet_gateway_api.app.core.config import settings
from sheet_gateway_api.app.core.memory_store import MemoryStore
from sheet_gateway_api.app.core.sheets import get_store
from sheet_gateway_api.app.main import app

AGENT = settings.agent_field
MESSAGE = settings.message_field
NOTES = settings.call_notes_field
CALL_TIME = settings.call_time_field
LAST_CONTACT = settings.last_contact_field

FIXED_NOW = datetime(2026, 10, 18, 14, 5, tzinfo=timezone(timedelta(hours=9)))
TODAY = "2026-10-18"
NOW_TEXT = "2026-10-18 14:05"


def company_rows() -> list[dict[str, str]]:
    """Four companies; Kim already has a contact logged today on row 0."""
    return [
        {"기업명": "Alpha Foods", AGENT: "Kim", LAST_CONTACT: TODAY, NOTES: "Called, interested", CALL_TIME: "2026-10-18 09:30", "지역": "Seoul"},
        {"기업명": "Beta Logistics", AGENT: "Kim", LAST_CONTACT: "2026-10-17", NOTES: "", CALL_TIME: "", "지역": "Busan"},
        {"기업명": "Gamma Tech", AGENT: "Lee", LAST_CONTACT: "", NOTES: "old notes", CALL_TIME: "2026-10-10 11:00", "지역": "Seoul"},
        {"기업명": "Delta Retail", AGENT: "Park", LAST_CONTACT: "2026-10-01", NOTES: "", CALL_TIME: "", "지역": "Incheon"},
    ]


@pytest.fixture
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Pin the local clock used by the contact rules."""
    monkeypatch.setattr(clock, "local_now", lambda offset_hours=None: FIXED_NOW)
    return FIXED_NOW


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore(
        {
            settings.contact_collection: company_rows(),
            "Specialists": [{"이름": "Kim", "팀": "A"}, {"이름": "Lee", "팀": "B"}],
        }
    )


@pytest.fixture
def companies(store: MemoryStore):
    return store.collection(settings.contact_collection)


@pytest.fixture
def client(store: MemoryStore, frozen_clock: datetime):
    """TestClient wired to the in-memory store."""
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
