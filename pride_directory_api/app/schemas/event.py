"""
Pydantic models for event data.

Events are created outside this service and only read here.
``EventTile`` carries the raw fields of an event document plus the
derived ``price_label`` ("Free" when no price is set).
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class EventTile(BaseModel):
    id: str
    title: str = Field("", examples=["Pride Picnic"])
    description: str = ""
    date: str = Field("", examples=["2025-06-14T00:00:00.000Z"])
    start_time: str = ""
    end_time: str = ""
    location: str = ""
    city: str = ""
    state: str = ""
    capacity: int = 0
    price: str = ""
    price_label: str = "Free"
    image_url: str = ""
    business_name: str = ""
    business_id: str = ""
    category: str = ""


class UpcomingEvents(BaseModel):
    events: List[EventTile] = Field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
