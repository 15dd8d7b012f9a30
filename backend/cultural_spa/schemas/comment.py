from datetime import datetime

from pydantic import Field

from cultural_spa.models.comment import MAX_COMMENT_LENGTH
from cultural_spa.schemas.common import APIModel


class CommentCreate(APIModel):
    text: str = Field(..., min_length=1, max_length=MAX_COMMENT_LENGTH)


class CommentResponse(APIModel):
    id: int
    venue_id: str
    user_id: int
    username: str
    text: str
    created_at: datetime
