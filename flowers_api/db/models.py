"""SQLAlchemy models mirroring the JSON document layout."""
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, JSON, String, func

from .session import Base


class Document(Base):
    """One record of one collection; ``data`` holds every field except the id."""

    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    doc_id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0, index=True)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
