"""
Venue comments.

Posting checks that the venue exists and then inserts. The two steps are
not atomic: a venue deleted in between leaves an orphaned comment, which
is tolerated like any other orphan.
"""

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cultural_spa.core.logging import get_logger
from cultural_spa.core.metrics import comments_created
from cultural_spa.models.comment import Comment
from cultural_spa.schemas.comment import CommentCreate
from cultural_spa.services.venue_service import venue_exists

logger = get_logger(__name__)


async def list_comments(db: AsyncSession, venue_id: str) -> list[Comment]:
    result = await db.execute(
        select(Comment)
        .where(Comment.venue_id == venue_id)
        .order_by(Comment.created_at.desc(), Comment.id.desc())
    )
    return list(result.scalars().all())


async def create_comment(
    db: AsyncSession,
    venue_id: str,
    user_id: int,
    username: str,
    data: CommentCreate,
) -> Comment:
    if not await venue_exists(db, venue_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Venue not found")

    comment = Comment(venue_id=venue_id, user_id=user_id, username=username, text=data.text)
    db.add(comment)
    await db.commit()
    await db.refresh(comment)

    comments_created.inc()
    logger.info("comment_created", comment_id=comment.id, venue_id=venue_id, length=len(data.text))
    return comment


async def delete_comment(db: AsyncSession, comment_id: int) -> None:
    comment = await db.get(Comment, comment_id)
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    await db.delete(comment)
    await db.commit()
    logger.info("comment_deleted", comment_id=comment_id)
