"""Purchase state transitions and the listing status changes that follow them.

These helpers only mutate ORM objects; callers own the transaction.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from estatemls.core.errors import ValidationError
from estatemls.db.orm_registry import utcnow
from estatemls.models.enums import PropertyStatus, PurchaseStatus
from estatemls.models.purchase import Purchase

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def complete_purchase(db: Session, purchase: Purchase) -> Purchase:
    """Mark a fully paid purchase completed and its property sold."""
    if purchase.remaining_amount > _ZERO:
        raise ValidationError("Purchase cannot be completed while a balance remains")

    now = utcnow()
    purchase.remaining_amount = _ZERO
    purchase.status = PurchaseStatus.COMPLETED
    purchase.completion_date = now

    prop = purchase.property
    prop.status = PropertyStatus.SOLD
    prop.sold_at = now

    db.flush()
    logger.info("purchase completed", extra={"purchase_id": purchase.id, "property_id": prop.id})
    return purchase


def cancel_purchase(db: Session, purchase: Purchase) -> Purchase:
    """Cancel an open purchase and put the listing back on the market."""
    if purchase.status != PurchaseStatus.PENDING:
        raise ValidationError("Only pending purchases can be cancelled")

    purchase.status = PurchaseStatus.CANCELLED
    purchase.completion_date = None

    prop = purchase.property
    prop.status = PropertyStatus.PUBLISHED
    prop.sold_at = None

    db.flush()
    logger.info("purchase cancelled", extra={"purchase_id": purchase.id, "property_id": prop.id})
    return purchase


def change_status(
    db: Session,
    purchase: Purchase,
    status: Optional[PurchaseStatus] = None,
    notes: Optional[str] = None,
) -> Purchase:
    """Admin edit: optional status transition plus free-form notes."""
    if notes is not None:
        purchase.notes = notes

    if status is None or status == purchase.status:
        db.flush()
        return purchase

    if purchase.status != PurchaseStatus.PENDING:
        raise ValidationError(f"Cannot change status of a {purchase.status.value} purchase")

    if status == PurchaseStatus.COMPLETED:
        return complete_purchase(db, purchase)
    if status == PurchaseStatus.CANCELLED:
        return cancel_purchase(db, purchase)

    raise ValidationError("Invalid status value")
