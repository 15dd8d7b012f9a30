from datetime import datetime

from pydantic import Field

from cultural_spa.schemas.common import APIModel


class FavoriteCreate(APIModel):
    venue_id: str = Field(..., min_length=1, max_length=32)


class FavoriteResponse(APIModel):
    id: int
    user_id: int
    venue_id: str
    created_at: datetime
