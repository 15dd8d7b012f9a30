"""
Event model.

Key design decisions:
- `venue_id` is indexed but carries no foreign key: deleting a venue leaves
  its events in place (orphaned) instead of cascading.
- `date` is the dataset's free-text date list, e.g. "2025-11-01; 2025-11-08".
  ISO prefixes keep lexical range filters meaningful.
"""

from sqlalchemy import Column, Index, String, Text

from cultural_spa.db.base import Base


class Event(Base):
    __tablename__ = "events"

    id = Column(String(32), primary_key=True)
    title = Column(String(500), nullable=False)
    venue_id = Column(String(32), nullable=False, index=True)
    date = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    presenter = Column(String(500), nullable=False, default="")

    __table_args__ = (
        Index("ix_events_title", "title"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, title={self.title}, venue={self.venue_id})>"
