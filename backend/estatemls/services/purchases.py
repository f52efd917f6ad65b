"""Purchase creation and lookups."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from estatemls.core.errors import ConflictError, NotFoundError, ValidationError
from estatemls.models.enums import PaymentMethod, PaymentStatus, PropertyStatus, PurchaseStatus
from estatemls.models.payment import Payment
from estatemls.models.property import Property
from estatemls.models.purchase import Purchase
from estatemls.models.user import User
from estatemls.services import lifecycle
from estatemls.services.policy import Action, authorize, evaluate

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _with_details(stmt):
    return stmt.execution_options(populate_existing=True).options(
        selectinload(Purchase.property).selectinload(Property.media),
        selectinload(Purchase.buyer),
        selectinload(Purchase.payments),
    )


def create_purchase(
    db: Session,
    buyer: User,
    *,
    property_id: int,
    total_amount: Decimal,
    down_payment: Decimal,
    payment_method: Optional[PaymentMethod] = None,
) -> Purchase:
    """Open a purchase, record the down payment and take the listing off the market.

    The total must equal the listing price. The listing moves
    ``published -> pending`` with a conditional UPDATE so two buyers racing for
    the same property cannot both succeed.
    """
    if total_amount is None or total_amount <= _ZERO:
        raise ValidationError("Total amount must be greater than zero")
    if down_payment is None or down_payment <= _ZERO:
        raise ValidationError("Down payment must be greater than zero")
    if down_payment > total_amount:
        raise ValidationError("Down payment cannot exceed the total amount")

    prop = db.get(Property, property_id)
    if prop is None:
        raise NotFoundError("Property not found")

    authorize(buyer, Action.PURCHASE_CREATE, prop)

    if prop.status != PropertyStatus.PUBLISHED:
        raise ConflictError("Property is not available for purchase")
    if total_amount != prop.price:
        raise ValidationError("Total amount must match the listing price")

    try:
        claimed = db.execute(
            update(Property)
            .where(Property.id == property_id, Property.status == PropertyStatus.PUBLISHED)
            .values(status=PropertyStatus.PENDING)
            .execution_options(synchronize_session=False)
        ).rowcount
        if claimed != 1:
            raise ConflictError("Property is not available for purchase")

        purchase = Purchase(
            property_id=property_id,
            buyer_id=buyer.id,
            total_amount=total_amount,
            down_payment=down_payment,
            remaining_amount=total_amount - down_payment,
            status=PurchaseStatus.PENDING,
        )
        db.add(purchase)
        db.flush()

        db.add(
            Payment(
                purchase_id=purchase.id,
                amount=down_payment,
                payment_method=payment_method or PaymentMethod.BANK_TRANSFER,
                status=PaymentStatus.COMPLETED,
                notes="Down payment",
            )
        )
        db.flush()
        db.refresh(prop)

        if purchase.remaining_amount <= _ZERO:
            lifecycle.complete_purchase(db, purchase)

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "purchase created",
        extra={"purchase_id": purchase.id, "property_id": property_id, "buyer_id": buyer.id},
    )
    return get_purchase(db, purchase.id)


def get_purchase(db: Session, purchase_id: int) -> Purchase:
    purchase = db.execute(_with_details(select(Purchase).where(Purchase.id == purchase_id))).scalar_one_or_none()
    if purchase is None:
        raise NotFoundError("Purchase not found")
    return purchase


def get_purchase_for(db: Session, subject: User, purchase_id: int) -> Purchase:
    """Existence first (404), then authorization (403)."""
    purchase = get_purchase(db, purchase_id)
    authorize(subject, Action.PURCHASE_READ, purchase)
    return purchase


def list_purchases(db: Session, subject: User, status: Optional[PurchaseStatus] = None) -> List[Purchase]:
    stmt = _with_details(select(Purchase))
    if not evaluate(subject, Action.LIST_ALL):
        stmt = stmt.where(Purchase.buyer_id == subject.id)
    if status is not None:
        stmt = stmt.where(Purchase.status == status)
    stmt = stmt.order_by(Purchase.purchase_date.desc(), Purchase.id.desc())
    return list(db.execute(stmt).scalars().all())


def list_my_purchases(db: Session, buyer: User) -> List[Purchase]:
    stmt = (
        _with_details(select(Purchase))
        .where(Purchase.buyer_id == buyer.id)
        .order_by(Purchase.purchase_date.desc(), Purchase.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def update_purchase(
    db: Session,
    subject: User,
    purchase_id: int,
    *,
    status: Optional[PurchaseStatus] = None,
    notes: Optional[str] = None,
) -> Purchase:
    purchase = get_purchase(db, purchase_id)
    authorize(subject, Action.PURCHASE_UPDATE, purchase)
    try:
        lifecycle.change_status(db, purchase, status=status, notes=notes)
        db.commit()
    except Exception:
        db.rollback()
        raise
    return get_purchase(db, purchase_id)
