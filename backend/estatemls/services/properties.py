"""Listing CRUD and media management."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import exists, select, update
from sqlalchemy.orm import Session, selectinload

from estatemls.core.errors import ConflictError, NotFoundError, ValidationError
from estatemls.models.enums import PropertyStatus, UserRole
from estatemls.models.property import Property, PropertyMedia
from estatemls.models.purchase import Purchase
from estatemls.models.user import User
from estatemls.services.policy import Action, authorize

logger = logging.getLogger(__name__)

# statuses an owner/agent may set by hand; pending/sold belong to the purchase flow
EDITABLE_STATUSES = {PropertyStatus.DRAFT, PropertyStatus.PUBLISHED, PropertyStatus.RENTED}
EDITABLE_FIELDS = ("title", "description", "address", "location", "property_type", "price", "agent_id")


def _check_agent(db: Session, agent_id: int) -> None:
    agent = db.get(User, agent_id)
    if agent is None or agent.role not in (UserRole.AGENT, UserRole.ADMIN):
        raise ValidationError("Invalid agent")


def list_properties(
    db: Session,
    *,
    status: Optional[PropertyStatus] = None,
    property_type: Optional[str] = None,
    location: Optional[str] = None,
    min_price: Optional[Decimal] = None,
    max_price: Optional[Decimal] = None,
    limit: Optional[int] = None,
) -> List[Property]:
    stmt = select(Property).options(selectinload(Property.media))
    if status is not None:
        stmt = stmt.where(Property.status == status)
    if property_type:
        stmt = stmt.where(Property.property_type == property_type)
    if location:
        stmt = stmt.where(Property.location == location)
    if min_price is not None:
        stmt = stmt.where(Property.price >= min_price)
    if max_price is not None:
        stmt = stmt.where(Property.price <= max_price)
    stmt = stmt.order_by(Property.created_at.desc(), Property.id.desc())
    if limit:
        stmt = stmt.limit(limit)
    return list(db.execute(stmt).scalars().all())


def get_property(db: Session, property_id: int) -> Property:
    prop = db.execute(
        select(Property)
        .where(Property.id == property_id)
        .options(selectinload(Property.media))
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()
    if prop is None:
        raise NotFoundError("Property not found")
    return prop


def create_property(db: Session, subject: User, data: Dict[str, Any]) -> Property:
    authorize(subject, Action.PROPERTY_CREATE)

    price = data.get("price")
    if price is None or price <= 0:
        raise ValidationError("Price must be greater than zero")
    if data.get("agent_id") is not None:
        _check_agent(db, data["agent_id"])

    prop = Property(
        title=data["title"],
        description=data.get("description"),
        address=data["address"],
        location=data.get("location"),
        property_type=data.get("property_type"),
        price=price,
        status=PropertyStatus.DRAFT,
        owner_id=subject.id,
        agent_id=data.get("agent_id") or subject.id,
    )
    db.add(prop)
    db.commit()
    logger.info("property created", extra={"property_id": prop.id, "owner_id": subject.id})
    return get_property(db, prop.id)


def update_property(db: Session, subject: User, property_id: int, data: Dict[str, Any]) -> Property:
    prop = get_property(db, property_id)
    authorize(subject, Action.PROPERTY_UPDATE, prop)

    status = data.get("status")
    if status is not None:
        if status not in EDITABLE_STATUSES:
            raise ValidationError("Invalid status value")
        if prop.status in (PropertyStatus.PENDING, PropertyStatus.SOLD):
            raise ConflictError("Property is under purchase and its status cannot be changed")
        prop.status = status

    if data.get("agent_id") is not None:
        _check_agent(db, data["agent_id"])

    for field in EDITABLE_FIELDS:
        if field in data and data[field] is not None:
            setattr(prop, field, data[field])

    if prop.price is None or prop.price <= 0:
        raise ValidationError("Price must be greater than zero")

    db.commit()
    return get_property(db, property_id)


def delete_property(db: Session, subject: User, property_id: int) -> None:
    prop = get_property(db, property_id)
    authorize(subject, Action.PROPERTY_DELETE, prop)

    referenced = db.execute(select(exists().where(Purchase.property_id == property_id))).scalar()
    if referenced:
        raise ConflictError("Property is referenced by a purchase and cannot be deleted")

    db.delete(prop)
    db.commit()
    logger.info("property deleted", extra={"property_id": property_id})


def add_media(
    db: Session,
    subject: User,
    property_id: int,
    *,
    file_path: str,
    media_type: str = "image",
    is_primary: bool = False,
    sort_order: int = 0,
) -> PropertyMedia:
    """Attach a media reference; a new primary item demotes the previous one.

    The first item added to a property becomes primary regardless of the flag.
    """
    prop = get_property(db, property_id)
    authorize(subject, Action.PROPERTY_MEDIA, prop)

    if not prop.media:
        is_primary = True

    try:
        if is_primary:
            db.execute(
                update(PropertyMedia)
                .where(PropertyMedia.property_id == property_id, PropertyMedia.is_primary.is_(True))
                .values(is_primary=False)
                .execution_options(synchronize_session=False)
            )
            db.flush()
        media = PropertyMedia(
            property_id=property_id,
            file_path=file_path,
            media_type=media_type,
            is_primary=is_primary,
            sort_order=sort_order,
        )
        db.add(media)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return media
