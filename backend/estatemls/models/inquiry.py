# backend/estatemls/models/inquiry.py
from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow
from estatemls.models.enums import ContactMethod, InquiryStatus, enum_type


class PropertyInquiry(Base):
    """A prospect's question about a listing, answered by its owner or agent."""
    __tablename__ = "property_inquiries"

    id = Column(Integer, primary_key=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)  # null for guests
    name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    message = Column(Text, nullable=False)
    preferred_contact_method = Column(enum_type(ContactMethod, "contact_method"))
    viewing_request_date = Column(DateTime(timezone=True))
    status = Column(
        enum_type(InquiryStatus, "inquiry_status"),
        nullable=False,
        default=InquiryStatus.PENDING,
        index=True,
    )
    agent_notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now(), onupdate=utcnow)
