"""
Venue endpoints (read-only; admin writes live under /admin).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import CurrentUser, require_member
from cultural_spa.db.session import get_db
from cultural_spa.schemas.event import EventResponse, VenueDetail
from cultural_spa.schemas.venue import VenueResponse, VenueSummary
from cultural_spa.services import venue_service

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get("", response_model=list[VenueSummary])
async def list_venues(_: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    """All venues with the number of events each hosts."""
    rows = await venue_service.list_venues(db)
    return [
        VenueSummary.model_validate(venue).model_copy(update={"event_count": count})
        for venue, count in rows
    ]


@router.get("/{venue_id}", response_model=VenueDetail)
async def get_venue(venue_id: str, _: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    venue, events = await venue_service.get_venue_with_events(db, venue_id)
    return VenueDetail(
        **VenueResponse.model_validate(venue).model_dump(),
        events=[EventResponse.model_validate(e) for e in events],
    )
