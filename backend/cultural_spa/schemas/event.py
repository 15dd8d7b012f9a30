"""
Pydantic schemas for events.
"""

from typing import Optional

from pydantic import Field

from cultural_spa.schemas.common import APIModel
from cultural_spa.schemas.venue import VenueResponse


class EventResponse(APIModel):
    id: str
    title: str
    venue_id: str
    date: str
    description: str
    presenter: str


class EventListItem(EventResponse):
    venue_name: Optional[str] = None


class EventListResponse(APIModel):
    items: list[EventListItem]
    total: int
    limit: int
    offset: int


class RandomEventsResponse(APIModel):
    items: list[EventListItem]


class EventDetailResponse(APIModel):
    event: EventResponse
    venue: Optional[VenueResponse]


class EventCreate(APIModel):
    id: str = Field(..., min_length=1, max_length=32)
    title: str = Field(..., min_length=1, max_length=500)
    venue_id: str = Field(..., min_length=1, max_length=32)
    date: str = Field(..., min_length=1)
    description: str = ""
    presenter: str = Field("", max_length=500)


class EventUpdate(APIModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    venue_id: Optional[str] = Field(None, min_length=1, max_length=32)
    date: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    presenter: Optional[str] = Field(None, max_length=500)


class VenueDetail(VenueResponse):
    events: list[EventResponse] = []
