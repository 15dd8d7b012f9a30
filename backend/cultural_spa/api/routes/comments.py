"""
Venue comment endpoints.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.api.deps import CurrentUser, require_admin, require_member
from cultural_spa.db.session import get_db
from cultural_spa.schemas.comment import CommentCreate, CommentResponse
from cultural_spa.services import comment_service

router = APIRouter(prefix="/comments", tags=["Comments"])


@router.get("/{venue_id}", response_model=list[CommentResponse])
async def list_comments(venue_id: str, _: CurrentUser = Depends(require_member), db: AsyncSession = Depends(get_db)):
    """Comments for a venue, newest first."""
    return await comment_service.list_comments(db, venue_id)


@router.post("/{venue_id}", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    venue_id: str,
    data: CommentCreate,
    user: CurrentUser = Depends(require_member),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.create_comment(db, venue_id, user.id, user.username, data)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: int, _: CurrentUser = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
