"""Shared fixtures for the On This Day tests"""

from datetime import date
from typing import List, Optional

import pytest

from on_this_day.models import EventRecord, Settings
from on_this_day.utils.data_store import DataStore


TODAY = date(2024, 10, 18)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host configuration out of the tests"""
    for name in ("ON_THIS_DAY_ACCESS_TOKEN", "ON_THIS_DAY_DATA_PATH", "ON_THIS_DAY_PROVIDERS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_OUTPUT", "stderr")


@pytest.fixture
def store(tmp_path):
    return DataStore(tmp_path / "data.json")


@pytest.fixture
def sample_events() -> List[EventRecord]:
    return [
        EventRecord(description="The first event", category="regular", year=1867),
        EventRecord(description="A second event", category="birth", year=1990),
        EventRecord(description="An undated event", category="regular", year=0),
        EventRecord(description="Fourth event", category="death", year=2001),
        EventRecord(description="Fifth event", category=None, year=None),
    ]


@pytest.fixture
def data_array_payload():
    return {
        "data": [
            {"eventdescription": "Alaska is transferred to the United States", "eventyear": 1867, "eventtype": "regular"},
            {"eventdescription": "Someone is born", "eventyear": 1990, "eventtype": "birth"},
            {"eventdescription": "Something happened <b>once</b>", "eventyear": None},
        ]
    }


@pytest.fixture
def category_map_payload():
    return {
        "selected": [{"text": "Selected event", "year": 2000, "pages": []}],
        "births": [{"text": "A person", "year": 1950}],
        "holidays": [{"text": "A feast day"}],
    }


class FakeClient:
    """Stands in for FeedClient and counts fetches"""

    def __init__(self, events: Optional[List[EventRecord]] = None, error: Optional[Exception] = None):
        self.events = list(events or [])
        self.error = error
        self.calls = 0

    def fetch_today_events(self, today=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.events)


@pytest.fixture
def fake_client_factory():
    return FakeClient


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def today() -> date:
    return TODAY
