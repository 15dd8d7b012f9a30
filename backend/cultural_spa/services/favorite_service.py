"""
Favorite venues per user.
"""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.core.metrics import favorites_changed
from cultural_spa.models.favorite import Favorite
from cultural_spa.models.user import ROLE_ADMIN
from cultural_spa.services.venue_service import venue_exists

logger = get_logger(__name__)

ALREADY_FAVORITE = "Venue already in favorites"


async def list_favorites(db: AsyncSession, user_id: int) -> list[Favorite]:
    result = await db.execute(
        select(Favorite)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    return list(result.scalars().all())


async def add_favorite(db: AsyncSession, user_id: int, venue_id: str) -> Favorite:
    if not await venue_exists(db, venue_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")

    existing = await db.execute(
        select(Favorite.id).where(Favorite.user_id == user_id, Favorite.venue_id == venue_id)
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_FAVORITE)

    favorite = Favorite(user_id=user_id, venue_id=venue_id)
    db.add(favorite)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent add of the same pair
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=ALREADY_FAVORITE)
    await db.refresh(favorite)

    favorites_changed.labels(operation="add").inc()
    logger.info("favorite_added", favorite_id=favorite.id, venue_id=venue_id)
    return favorite


async def remove_favorite(db: AsyncSession, favorite_id: int, user_id: int, role: str) -> None:
    """Admins may remove any favorite; users only their own (others' read as 404)."""
    query = select(Favorite).where(Favorite.id == favorite_id)
    if role != ROLE_ADMIN:
        query = query.where(Favorite.user_id == user_id)
    favorite = (await db.execute(query)).scalar_one_or_none()
    if not favorite:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")

    await db.delete(favorite)
    await db.commit()

    favorites_changed.labels(operation="remove").inc()
    logger.info("favorite_removed", favorite_id=favorite_id)
