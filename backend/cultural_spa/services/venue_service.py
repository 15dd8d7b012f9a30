"""
Venue reads, plus the admin-only create/update/delete.
"""

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.models.event import Event
from cultural_spa.models.venue import Venue
from cultural_spa.schemas.venue import VenueCreate, VenueUpdate

logger = get_logger(__name__)


async def list_venues(db: AsyncSession) -> list[tuple[Venue, int]]:
    """All venues with their event counts, in one grouped query."""
    counts = (
        select(Event.venue_id, func.count(Event.id).label("event_count"))
        .group_by(Event.venue_id)
        .subquery()
    )
    query = (
        select(Venue, func.coalesce(counts.c.event_count, 0))
        .outerjoin(counts, counts.c.venue_id == Venue.id)
        .order_by(Venue.id.asc())
    )
    result = await db.execute(query)
    return [(venue, count) for venue, count in result.all()]


async def get_venue(db: AsyncSession, venue_id: str) -> Venue:
    venue = await db.get(Venue, venue_id)
    if not venue:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")
    return venue


async def venue_exists(db: AsyncSession, venue_id: str) -> bool:
    result = await db.execute(select(Venue.id).where(Venue.id == venue_id))
    return result.scalar_one_or_none() is not None


async def get_venue_with_events(db: AsyncSession, venue_id: str) -> tuple[Venue, list[Event]]:
    venue = await get_venue(db, venue_id)
    result = await db.execute(select(Event).where(Event.venue_id == venue_id).order_by(Event.date.asc(), Event.id.asc()))
    return venue, list(result.scalars().all())


async def create_venue(db: AsyncSession, data: VenueCreate) -> Venue:
    if await venue_exists(db, data.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Venue already exists")

    venue = Venue(id=data.id, name=data.name, latitude=data.latitude, longitude=data.longitude)
    db.add(venue)
    await db.commit()
    await db.refresh(venue)

    logger.info("venue_created", venue_id=venue.id, name=venue.name)
    return venue


async def update_venue(db: AsyncSession, venue_id: str, data: VenueUpdate) -> Venue:
    venue = await get_venue(db, venue_id)
    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(venue, field, value)
    await db.commit()
    await db.refresh(venue)

    logger.info("venue_updated", venue_id=venue.id)
    return venue


async def delete_venue(db: AsyncSession, venue_id: str) -> None:
    """
    Remove the venue row only. Its events, comments and favorites stay
    behind and keep pointing at the deleted id.
    """
    venue = await get_venue(db, venue_id)
    await db.delete(venue)
    await db.commit()
    logger.info("venue_deleted", venue_id=venue_id)
