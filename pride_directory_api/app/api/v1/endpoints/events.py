"""
Event endpoints for API v1.

Events are read-only here: the upcoming-events widget and the event
detail page.
"""

import logging
import sqlite3

from fastapi import APIRouter, HTTPException, status

from pride_directory_api.app.schemas.event import EventTile, UpcomingEvents
from pride_directory_api.app.services.event_service import EventService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/upcoming", response_model=UpcomingEvents)
async def list_upcoming_events() -> UpcomingEvents:
    """Next events from today onwards, soonest first."""
    return await EventService.list_upcoming_events()


@router.get("/{event_id}", response_model=EventTile)
async def get_event(event_id: str) -> EventTile:
    """Retrieve a single event by its ID.  Raises 404 if it does not exist."""
    try:
        return await EventService.get_event(event_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except sqlite3.Error as e:
        logger.exception("Error fetching event %s", event_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to load event details",
        ) from e
