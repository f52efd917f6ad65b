# backend/estatemls/models/agent_profile.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow


class AgentProfile(Base):
    """Public profile details for a user with the agent role."""
    __tablename__ = "agent_profiles"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True)
    license_number = Column(Text)
    agency = Column(Text)
    experience_years = Column(Integer)
    bio = Column(Text)
    location = Column(Text)
    specialization = Column(Text)                  # residential, commercial, land ...
    rating = Column(Numeric(3, 2))                 # 0.00 - 5.00, null until rated
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    user = relationship("User", back_populates="agent_profile")
