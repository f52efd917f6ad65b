# backend/estatemls/models/user.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base
from estatemls.models.enums import UserRole, enum_type


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    external_id = Column(Text, nullable=False, unique=True, index=True)  # identity-provider subject
    email = Column(Text, nullable=False)
    first_name = Column(Text)
    last_name = Column(Text)
    phone = Column(Text)
    role = Column(enum_type(UserRole, "user_role"), nullable=False, default=UserRole.USER)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    purchases = relationship("Purchase", back_populates="buyer")
    agent_profile = relationship("AgentProfile", back_populates="user", uselist=False)

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
