from sqlalchemy import Column, DateTime, String

from cultural_spa.db.base import Base

DATASET_META_NAME = "dataset"


class DatasetMeta(Base):
    __tablename__ = "dataset_meta"

    name = Column(String(64), primary_key=True)
    last_updated = Column(DateTime(timezone=True), nullable=False)
