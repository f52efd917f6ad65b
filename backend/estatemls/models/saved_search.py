# backend/estatemls/models/saved_search.py
from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow


class SavedSearch(Base):
    """Named listing filters a user can re-run later."""
    __tablename__ = "saved_searches"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    search_params = Column(JSON, nullable=False, default=dict)   # snake_case listing filters
    notifications_enabled = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
