"""Keyed text blob storage, the durable home of settings and drafts."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from invoice_engine.app.core.time import utc_now
from invoice_engine.app.db.base_class import Base


class StorageEntry(Base):
    __tablename__ = "storage_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)
