"""
Business logic for events.

Events are created by businesses outside this service; here they are
only listed for the landing page and shown one at a time.
"""

import logging
import math
import re
import sqlite3
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pride_directory_api.app.core.config import settings
from pride_directory_api.app.core.db import Document, get_connection, load_document
from pride_directory_api.app.schemas.event import EventTile, UpcomingEvents

logger = logging.getLogger(__name__)

DEFAULT_EVENT_IMAGE = "https://images.unsplash.com/photo-1561612217-e5147162fd31?auto=format&fit=crop&q=80&w=1920"

_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def price_label(price: str) -> str:
    """``"Free"`` for an empty price, ``"$12.50"`` for a numeric one, else the raw text.

    Only the leading number counts, so ``"12 per person"`` is ``"$12.00"``.
    """
    if not price.strip():
        return "Free"
    match = _LEADING_NUMBER_RE.match(price)
    if not match:
        return price
    value = float(match.group(0))
    if not math.isfinite(value):
        return price
    return f"${value:.2f}"


def normalize_event(doc: Document) -> EventTile:
    data = doc.data
    try:
        capacity = int(data.get("capacity") or 0)
    except (TypeError, ValueError):
        capacity = 0
    price = _text(data.get("price"))
    return EventTile(
        id=doc.id,
        title=_text(data.get("title")),
        description=_text(data.get("description")),
        date=_text(data.get("date")),
        start_time=_text(data.get("startTime")),
        end_time=_text(data.get("endTime")),
        location=_text(data.get("location")),
        city=_text(data.get("city")),
        state=_text(data.get("state")),
        capacity=capacity,
        price=price,
        price_label=price_label(price),
        image_url=_text(data.get("imageUrl")) or DEFAULT_EVENT_IMAGE,
        business_name=_text(data.get("businessName")),
        business_id=_text(data.get("businessId")),
        category=_text(data.get("category")),
    )


def collect_events(docs: Iterable[Document]) -> List[EventTile]:
    """Normalise, deduplicate by id and sort ascending by date."""
    events: Dict[str, EventTile] = {}
    for doc in docs:
        events[doc.id] = normalize_event(doc)
    return sorted(events.values(), key=lambda e: e.date)


class EventService:
    """Read operations on the ``events`` collection."""

    @classmethod
    async def _fetch_upcoming_documents(cls, today: str) -> List[Document]:
        conn = get_connection()
        try:
            rows = conn.execute(
                """
                SELECT id, data, created_at FROM events
                WHERE substr(json_extract(data, '$.date'), 1, 10) >= ?
                ORDER BY json_extract(data, '$.date') ASC
                """,
                (today,),
            ).fetchall()
            return [load_document(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def list_upcoming_events(cls, today: Optional[datetime] = None) -> UpcomingEvents:
        """Next events from today (UTC) onwards, trimmed to ``upcoming_events_limit``."""
        day = (today or datetime.now(timezone.utc)).date().isoformat()
        try:
            docs = await cls._fetch_upcoming_documents(day)
        except sqlite3.Error:
            logger.exception("Error fetching upcoming events")
            return UpcomingEvents(error="Failed to load upcoming events")
        events = collect_events(docs)[: settings.upcoming_events_limit]
        return UpcomingEvents(events=events, count=len(events))

    @classmethod
    async def get_event(cls, event_id: str) -> EventTile:
        """Retrieve a single event by ID.

        Raises ``ValueError`` if the event does not exist; store errors
        propagate.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                "SELECT id, data, created_at FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
        finally:
            conn.close()
        if not row:
            raise ValueError("Event not found")
        return normalize_event(load_document(row))
