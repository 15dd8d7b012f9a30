"""
Venue model keyed by the external dataset id.
"""

from sqlalchemy import Column, Float, String

from cultural_spa.db.base import Base


class Venue(Base):
    __tablename__ = "venues"

    id = Column(String(32), primary_key=True)
    name = Column(String(255), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name})>"
