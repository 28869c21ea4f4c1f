"""SQLAlchemy ORM models for the key-value document store"""

from sqlalchemy import Column, DateTime, JSON, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StoredDocument(Base):
    """One JSON document per key (pm_settings, pm_state, ...)"""

    __tablename__ = "stored_document"

    key = Column(Text, primary_key=True)
    payload = Column(JSON, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
