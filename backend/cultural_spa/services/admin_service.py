"""
Admin dashboard and dataset re-import.
"""

from pathlib import Path

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.models.event import Event
from cultural_spa.models.venue import Venue
from cultural_spa.services.seed_service import DatasetError, get_dataset_updated_at, seed_dataset_if_needed

logger = get_logger(__name__)


async def get_dashboard(db: AsyncSession) -> dict:
    venue_count = (await db.execute(select(func.count()).select_from(Venue))).scalar_one()
    event_count = (await db.execute(select(func.count()).select_from(Event))).scalar_one()
    return {"venue_count": venue_count, "event_count": event_count}


async def import_dataset(db: AsyncSession, dataset_dir: Path, allowed: bool) -> dict:
    if not allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Dataset import is disabled")

    try:
        await seed_dataset_if_needed(db, dataset_dir, force=True)
    except DatasetError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    counts = await get_dashboard(db)
    logger.info("dataset_reimported", **counts)
    return {**counts, "last_updated": await get_dataset_updated_at(db)}
