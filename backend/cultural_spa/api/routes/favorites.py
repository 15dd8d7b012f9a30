"""
Favorite venue endpoints for the signed-in user.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import CurrentUser, require_member
from cultural_spa.db.session import get_db
from cultural_spa.schemas.favorite import FavoriteCreate, FavoriteResponse
from cultural_spa.services import favorite_service

router = APIRouter(prefix="/favorites", tags=["Favorites"])


@router.get("", response_model=list[FavoriteResponse])
async def list_favorites(user: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    return await favorite_service.list_favorites(db, user.id)


@router.post("", response_model=FavoriteResponse, status_code=status.HTTP_201_CREATED)
async def add_favorite(
    data: FavoriteCreate,
    user: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    return await favorite_service.add_favorite(db, user.id, data.venue_id)


@router.delete("/{favorite_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_favorite(
    favorite_id: int,
    user: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    await favorite_service.remove_favorite(db, favorite_id, user.id, user.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
