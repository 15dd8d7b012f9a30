"""
Event listing, lookup and random sampling, plus admin create/update/delete.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.models.event import Event
from cultural_spa.models.venue import Venue
from cultural_spa.schemas.event import EventCreate, EventListItem, EventUpdate
from cultural_spa.services.venue_service import venue_exists

logger = get_logger(__name__)

RANDOM_SAMPLE_SIZE = 3

SORT_COLUMNS = {
    "date": Event.date,
    "title": Event.title,
    "id": Event.id,
}


@dataclass(frozen=True)
class EventFilter:
    venue_id: Optional[str] = None
    q: Optional[str] = None
    presenter: Optional[str] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None


def _contains_pattern(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _apply_filter(query, filters: EventFilter):
    if filters.venue_id:
        query = query.where(Event.venue_id == filters.venue_id)
    if filters.q:
        query = query.where(Event.title.ilike(_contains_pattern(filters.q), escape="\\"))
    if filters.presenter:
        query = query.where(Event.presenter.ilike(_contains_pattern(filters.presenter), escape="\\"))
    # The date column is text; bounds compare lexically
    if filters.date_from:
        query = query.where(Event.date >= filters.date_from)
    if filters.date_to:
        query = query.where(Event.date <= filters.date_to)
    return query


def _with_venue_name(rows) -> list[EventListItem]:
    items = []
    for event, venue_name in rows:
        item = EventListItem.model_validate(event)
        items.append(item.model_copy(update={"venue_name": venue_name}))
    return items


async def list_events(
    db: AsyncSession,
    filters: EventFilter,
    limit: int = 50,
    offset: int = 0,
    sort: str = "date",
    order: str = "asc",
) -> tuple[list[EventListItem], int]:
    """
    Filtered, sorted page of events joined with their venue's name.
    Returns (items, total matching rows ignoring limit/offset).
    """
    count_query = _apply_filter(select(func.count()).select_from(Event), filters)
    total = (await db.execute(count_query)).scalar_one()

    column = SORT_COLUMNS[sort]
    ordering = column.desc() if order == "desc" else column.asc()
    tiebreak = Event.id.desc() if order == "desc" else Event.id.asc()

    query = _apply_filter(
        select(Event, Venue.name).outerjoin(Venue, Venue.id == Event.venue_id),
        filters,
    )
    query = query.order_by(ordering, tiebreak).offset(offset).limit(limit)
    result = await db.execute(query)
    return _with_venue_name(result.all()), total


async def random_events(db: AsyncSession, venue_id: Optional[str] = None) -> list[EventListItem]:
    query = select(Event, Venue.name).outerjoin(Venue, Venue.id == Event.venue_id)
    if venue_id:
        query = query.where(Event.venue_id == venue_id)
    query = query.order_by(func.random()).limit(RANDOM_SAMPLE_SIZE)
    result = await db.execute(query)
    return _with_venue_name(result.all())


async def get_event(db: AsyncSession, event_id: str) -> Event:
    event = await db.get(Event, event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


async def get_event_with_venue(db: AsyncSession, event_id: str) -> tuple[Event, Optional[Venue]]:
    event = await get_event(db, event_id)
    venue = await db.get(Venue, event.venue_id)
    return event, venue


async def _require_venue(db: AsyncSession, venue_id: str) -> None:
    if not await venue_exists(db, venue_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")


async def create_event(db: AsyncSession, data: EventCreate) -> Event:
    await _require_venue(db, data.venue_id)
    if await db.get(Event, data.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Event already exists")

    event = Event(**data.model_dump())
    db.add(event)
    await db.commit()
    await db.refresh(event)

    logger.info("event_created", event_id=event.id, venue_id=event.venue_id)
    return event


async def update_event(db: AsyncSession, event_id: str, data: EventUpdate) -> Event:
    event = await get_event(db, event_id)
    changes = data.model_dump(exclude_unset=True, exclude_none=True)
    if "venue_id" in changes and changes["venue_id"] != event.venue_id:
        await _require_venue(db, changes["venue_id"])
    for field, value in changes.items():
        setattr(event, field, value)
    await db.commit()
    await db.refresh(event)

    logger.info("event_updated", event_id=event.id, fields=sorted(changes))
    return event


async def delete_event(db: AsyncSession, event_id: str) -> None:
    event = await get_event(db, event_id)
    await db.delete(event)
    await db.commit()
    logger.info("event_deleted", event_id=event_id)
