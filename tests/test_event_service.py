"""Tests for the upcoming-events widget and event lookup."""

import asyncio
import sqlite3
from datetime import datetime, timezone

import pytest

from pride_directory_api.app.core.db import Document
from pride_directory_api.app.services.event_service import EventService, normalize_event, price_label

TODAY = datetime(2025, 6, 1, 15, 30, tzinfo=timezone.utc)


def test_price_label():
    assert price_label("") == "Free"
    assert price_label("12.5") == "$12.50"
    assert price_label("donation") == "donation"


def test_normalize_event_defaults():
    event = normalize_event(Document(id="e1", data={"title": "Drag Bingo", "capacity": "40", "price": 10}))
    assert event.capacity == 40
    assert event.price == "10"
    assert event.price_label == "$10.00"
    assert event.image_url.startswith("https://")
    assert event.business_name == ""


def test_upcoming_events_from_today_soonest_first(add_event):
    add_event("Yesterday", date="2025-05-31T18:00:00.000Z")
    add_event("Later", date="2025-08-01T00:00:00.000Z")
    add_event("Today", date="2025-06-01")
    add_event("Soon", date="2025-06-10T18:00:00.000Z")
    add_event("Next Month", date="2025-07-01T00:00:00.000Z")

    result = asyncio.run(EventService.list_upcoming_events(today=TODAY))

    assert result.error is None
    assert [e.title for e in result.events] == ["Today", "Soon", "Next Month"]
    assert result.count == 3


def test_get_event(add_event):
    event_id = add_event("Pride Parade", date="2025-06-28", businessName="City Pride", price="")
    event = asyncio.run(EventService.get_event(event_id))
    assert event.title == "Pride Parade"
    assert event.price_label == "Free"
    assert event.business_name == "City Pride"
    with pytest.raises(ValueError, match="Event not found"):
        asyncio.run(EventService.get_event("missing"))


@pytest.mark.parametrize(
    "price, label",
    [
        ("12 per person", "$12.00"),
        ("  .5", "$0.50"),
        ("nan", "nan"),
        ("inf", "inf"),
        ("1e999", "1e999"),
    ],
)
def test_price_label_leading_number(price, label):
    assert price_label(price) == label


def test_upcoming_events_store_failure(monkeypatch):
    async def broken(cls, today):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(EventService, "_fetch_upcoming_documents", classmethod(broken))
    result = asyncio.run(EventService.list_upcoming_events(today=TODAY))
    assert result.error == "Failed to load upcoming events"
    assert result.events == []
    assert result.count == 0
