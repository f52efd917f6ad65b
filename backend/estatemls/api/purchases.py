# backend/estatemls/api/purchases.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user
from estatemls.db.db_connection import get_db
from estatemls.models.enums import PurchaseStatus
from estatemls.models.user import User
from estatemls.schemas.purchase import PurchaseCreate, PurchaseOut, PurchaseUpdate
from estatemls.services import purchases

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


# ───────────────────────────────
# GET /api/purchases
# ───────────────────────────────
@router.get("", response_model=List[PurchaseOut])
def list_purchases(
    status: Optional[PurchaseStatus] = Query(None),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Admins see every purchase, everyone else only their own."""
    return purchases.list_purchases(db, user, status=status)


# ───────────────────────────────
# POST /api/purchases
# ───────────────────────────────
@router.post("", response_model=PurchaseOut, status_code=201)
def create_purchase(
    body: PurchaseCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return purchases.create_purchase(
        db,
        user,
        property_id=body.property_id,
        total_amount=body.total_amount,
        down_payment=body.down_payment,
        payment_method=body.payment_method,
    )


# declared before /{purchase_id} so "me" is not parsed as an id
@router.get("/me", response_model=List[PurchaseOut])
def my_purchases(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return purchases.list_my_purchases(db, user)


@router.get("/{purchase_id}", response_model=PurchaseOut)
def get_purchase(
    purchase_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return purchases.get_purchase_for(db, user, purchase_id)


@router.patch("/{purchase_id}", response_model=PurchaseOut)
def update_purchase(
    purchase_id: int,
    body: PurchaseUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Admin only: change status and/or notes."""
    return purchases.update_purchase(db, user, purchase_id, status=body.status, notes=body.notes)
