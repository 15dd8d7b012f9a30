"""
Comment on a venue. `username` is a snapshot taken when the comment is posted.
"""

from sqlalchemy import Column, Integer, String

from cultural_spa.db.base import Base, TimestampMixin

MAX_COMMENT_LENGTH = 1000


class Comment(Base, TimestampMixin):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    venue_id = Column(String(32), nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    username = Column(String(32), nullable=False)
    text = Column(String(MAX_COMMENT_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, venue={self.venue_id}, user={self.user_id})>"
