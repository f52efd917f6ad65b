# backend/estatemls/api/payments.py
from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user
from estatemls.db.db_connection import get_db
from estatemls.models.user import User
from estatemls.schemas.payment import AdminPaymentCreate, PaymentCreate, PaymentOut, PaymentResult
from estatemls.services import payments
from estatemls.services.policy import Action

router = APIRouter(prefix="/api/payments", tags=["payments"])


@router.get("", response_model=List[PaymentOut])
def list_payments(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return payments.list_payments(db, user)


# ───────────────────────────────
# POST /api/payments
# ───────────────────────────────
@router.post("", response_model=PaymentResult, status_code=201)
def submit_payment(
    body: PaymentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Buyer pays against an open purchase.
    - 400: non-positive amount, overpayment, or purchase not pending
    - 409: balance changed by a concurrent payment
    """
    payment, purchase = payments.submit_payment(
        db,
        user,
        purchase_id=body.purchase_id,
        amount=body.amount,
        payment_method=body.payment_method,
    )
    return {"payment": payment, "purchase": purchase}


@router.post("/admin", response_model=PaymentResult, status_code=201)
def record_payment(
    body: AdminPaymentCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Back-office entry of a payment received offline; notifies the buyer."""
    payment, purchase = payments.submit_payment(
        db,
        user,
        purchase_id=body.purchase_id,
        amount=body.amount,
        payment_method=body.payment_method,
        action=Action.PAYMENT_RECORD,
        notes=body.notes,
        notify_buyer=True,
    )
    return {"payment": payment, "purchase": purchase}


@router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(
    payment_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return payments.get_payment_for(db, user, payment_id)
