"""Payment ledger writer and purchase balance updater.

A payment is applied in one transaction:

1. conditional ``UPDATE purchases SET remaining_amount = remaining_amount - :amount
   WHERE id = :id AND status = 'pending' AND remaining_amount >= :amount``
2. insert the (immutable) payment row
3. complete the purchase when the balance reaches zero

If step 1 matches no row, another payment consumed the balance between our
read and our write; nothing is written and the caller gets a 409.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from estatemls.core.errors import ConflictError, NotFoundError, ValidationError
from estatemls.models.enums import PaymentMethod, PaymentStatus, PurchaseStatus
from estatemls.models.notification import Notification
from estatemls.models.payment import Payment
from estatemls.models.purchase import Purchase
from estatemls.models.user import User
from estatemls.services import lifecycle, purchases
from estatemls.services.policy import Action, authorize, evaluate
from estatemls.utils.formatting import format_currency

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _with_details(stmt):
    return stmt.execution_options(populate_existing=True).options(
        selectinload(Payment.purchase).selectinload(Purchase.property),
        selectinload(Payment.purchase).selectinload(Purchase.buyer),
    )


def submit_payment(
    db: Session,
    actor: User,
    *,
    purchase_id: int,
    amount: Decimal,
    payment_method: PaymentMethod,
    action: Action = Action.PURCHASE_PAY,
    notes: Optional[str] = None,
    notify_buyer: bool = False,
) -> Tuple[Payment, Purchase]:
    """Record ``amount`` against a purchase and update its balance atomically."""
    purchase = db.get(Purchase, purchase_id)
    if purchase is None:
        raise NotFoundError("Purchase not found")

    authorize(actor, action, purchase)

    if purchase.status != PurchaseStatus.PENDING:
        raise ValidationError("Cannot make payment on a completed or cancelled purchase")
    if amount is None or amount <= _ZERO:
        raise ValidationError("Payment amount must be greater than zero")
    if amount > purchase.remaining_amount:
        raise ValidationError("Payment amount cannot exceed the remaining amount")

    try:
        applied = db.execute(
            update(Purchase)
            .where(
                Purchase.id == purchase_id,
                Purchase.status == PurchaseStatus.PENDING,
                Purchase.remaining_amount >= amount,
            )
            .values(remaining_amount=Purchase.remaining_amount - amount)
            .execution_options(synchronize_session=False)
        ).rowcount
        if applied != 1:
            raise ConflictError("Purchase balance changed; payment was not applied")

        payment = Payment(
            purchase_id=purchase_id,
            amount=amount,
            payment_method=payment_method,
            status=PaymentStatus.COMPLETED,
            notes=notes,
        )
        db.add(payment)
        db.flush()
        db.refresh(purchase)

        if purchase.remaining_amount <= _ZERO:
            lifecycle.complete_purchase(db, purchase)

        if notify_buyer:
            db.add(
                Notification(
                    user_id=purchase.buyer_id,
                    title="Payment Recorded",
                    message=(
                        f"A payment of {format_currency(amount)} has been recorded "
                        f"for your purchase of {purchase.property.title}."
                    ),
                    type="payment",
                    related_to=f"purchase:{purchase_id}",
                )
            )

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "payment applied",
        extra={
            "payment_id": payment.id,
            "purchase_id": purchase_id,
            "amount": str(amount),
            "remaining": str(purchase.remaining_amount),
        },
    )
    return get_payment(db, payment.id), purchases.get_purchase(db, purchase_id)


def get_payment(db: Session, payment_id: int) -> Payment:
    payment = db.execute(_with_details(select(Payment).where(Payment.id == payment_id))).scalar_one_or_none()
    if payment is None:
        raise NotFoundError("Payment not found")
    return payment


def get_payment_for(db: Session, subject: User, payment_id: int, action: Action = Action.PAYMENT_READ) -> Payment:
    payment = get_payment(db, payment_id)
    authorize(subject, action, payment)
    return payment


def list_payments(db: Session, subject: User) -> List[Payment]:
    stmt = _with_details(select(Payment))
    if not evaluate(subject, Action.LIST_ALL):
        stmt = stmt.join(Payment.purchase).where(Purchase.buyer_id == subject.id)
    stmt = stmt.order_by(Payment.payment_date.desc(), Payment.id.desc())
    return list(db.execute(stmt).scalars().all())
