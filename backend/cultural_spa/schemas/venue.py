"""
Pydantic schemas for venues.
"""

from typing import Optional

from pydantic import Field

from cultural_spa.schemas.common import APIModel


class VenueResponse(APIModel):
    id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]


class VenueSummary(VenueResponse):
    event_count: int = 0


class VenueCreate(APIModel):
    id: str = Field(..., min_length=1, max_length=32)
    name: str = Field(..., min_length=1, max_length=255)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class VenueUpdate(APIModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
