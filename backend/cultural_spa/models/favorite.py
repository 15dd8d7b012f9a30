"""
A user's bookmarked venue. One row per (user, venue).
"""

from sqlalchemy import Column, Integer, String, UniqueConstraint

from cultural_spa.db.base import Base, TimestampMixin


class Favorite(Base, TimestampMixin):
    __tablename__ = "favorites"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    venue_id = Column(String(32), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "venue_id", name="uq_favorite_user_venue"),
    )

    def __repr__(self) -> str:
        return f"<Favorite(id={self.id}, user={self.user_id}, venue={self.venue_id})>"
