"""Prospect inquiries about a listing and their follow-up by the listing side."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from estatemls.core.errors import NotFoundError
from estatemls.models.enums import ContactMethod, InquiryStatus, PropertyStatus
from estatemls.models.inquiry import PropertyInquiry
from estatemls.models.notification import Notification
from estatemls.models.property import Property
from estatemls.models.user import User
from estatemls.services.policy import Action, authorize

logger = logging.getLogger(__name__)


def create_inquiry(
    db: Session,
    property_id: int,
    *,
    sender: Optional[User],
    name: str,
    email: str,
    message: str,
    phone: Optional[str] = None,
    preferred_contact_method: Optional[ContactMethod] = None,
    viewing_request_date: Optional[datetime] = None,
) -> PropertyInquiry:
    """Store an inquiry and notify the listing agent (or the owner when there is none).

    Guests may inquire; ``sender`` links the inquiry to a signed-in user.
    Drafts are not public, so they answer 404 like a missing listing.
    """
    prop = db.get(Property, property_id)
    if prop is None or prop.status == PropertyStatus.DRAFT:
        raise NotFoundError("Property not found")

    inquiry = PropertyInquiry(
        property_id=property_id,
        user_id=sender.id if sender is not None else None,
        name=name,
        email=email,
        phone=phone,
        message=message,
        preferred_contact_method=preferred_contact_method,
        viewing_request_date=viewing_request_date,
        status=InquiryStatus.PENDING,
    )
    db.add(inquiry)
    db.add(
        Notification(
            user_id=prop.agent_id or prop.owner_id,
            title="New Inquiry",
            message=f"{name} sent an inquiry about {prop.title}.",
            type="inquiry",
            related_to=f"property:{property_id}",
        )
    )
    db.commit()
    logger.info("inquiry received", extra={"property_id": property_id, "inquiry_id": inquiry.id})
    return inquiry


def list_inquiries(
    db: Session,
    subject: User,
    property_id: int,
    *,
    status: Optional[InquiryStatus] = None,
) -> List[PropertyInquiry]:
    prop = db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    authorize(subject, Action.INQUIRY_READ, prop)

    stmt = select(PropertyInquiry).where(PropertyInquiry.property_id == property_id)
    if status is not None:
        stmt = stmt.where(PropertyInquiry.status == status)
    stmt = stmt.order_by(PropertyInquiry.created_at.desc(), PropertyInquiry.id.desc())
    return list(db.execute(stmt).scalars().all())


def update_inquiry(
    db: Session,
    subject: User,
    property_id: int,
    inquiry_id: int,
    data: Dict[str, Any],
) -> PropertyInquiry:
    """Set ``status`` and/or ``agent_notes`` on an inquiry of this listing."""
    prop = db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")
    authorize(subject, Action.INQUIRY_UPDATE, prop)

    inquiry = db.get(PropertyInquiry, inquiry_id)
    if inquiry is None or inquiry.property_id != property_id:
        raise NotFoundError("Inquiry not found")

    if data.get("status") is not None:
        inquiry.status = data["status"]
    if "agent_notes" in data:
        inquiry.agent_notes = data["agent_notes"]
    db.commit()
    return inquiry
