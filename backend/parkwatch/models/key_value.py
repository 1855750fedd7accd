"""Key/value rows backing the parking store: snapshot, selection, history day maps, timestamps."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from parkwatch.db.base import Base


class KeyValue(Base):
    __tablename__ = "kv_store"

    key = Column(String(64), primary_key=True)  # e.g. "parkingLots", "historyStats3"
    value_json = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
