"""
Event browsing endpoints: filtered listing, random picks, detail.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import CurrentUser, require_member
from cultural_spa.db.session import get_db
from cultural_spa.schemas.event import (
    EventDetailResponse,
    EventListResponse,
    EventResponse,
    RandomEventsResponse,
)
from cultural_spa.schemas.venue import VenueResponse
from cultural_spa.services import event_service
from cultural_spa.services.event_service import EventFilter

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
async def list_events(
    venueid: Optional[str] = Query(None, min_length=1),
    q: Optional[str] = Query(None, min_length=1, description="Case-insensitive title search"),
    presenter: Optional[str] = Query(None, min_length=1),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    sort: Literal["date", "title", "id"] = Query("date"),
    order: Literal["asc", "desc"] = Query("asc"),
    date_from: Optional[str] = Query(None, alias="dateFrom", min_length=1),
    date_to: Optional[str] = Query(None, alias="dateTo", min_length=1),
    _: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """
    Page through events. Each item carries its venue's name; events whose
    venue was deleted come back with venueName null.
    """
    filters = EventFilter(
        venue_id=venueid,
        q=q,
        presenter=presenter,
        date_from=date_from,
        date_to=date_to,
    )
    items, total = await event_service.list_events(db, filters, limit=limit, offset=offset, sort=sort, order=order)
    return EventListResponse(items=items, total=total, limit=limit, offset=offset)


# Declared before /{event_id} so "random" is not taken for an id
@router.get("/random", response_model=RandomEventsResponse)
async def random_events(
    venueid: Optional[str] = Query(None, min_length=1),
    _: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    """Up to three random events, optionally from one venue."""
    return RandomEventsResponse(items=await event_service.random_events(db, venueid))


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(event_id: str, _: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    event, venue = await event_service.get_event_with_venue(db, event_id)
    return EventDetailResponse(
        event=EventResponse.model_validate(event),
        venue=VenueResponse.model_validate(venue) if venue else None,
    )
