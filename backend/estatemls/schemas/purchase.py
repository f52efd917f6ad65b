# backend/estatemls/schemas/purchase.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from estatemls.models.enums import PaymentMethod, PaymentStatus, PurchaseStatus
from estatemls.schemas.common import ApiModel, Money
from estatemls.schemas.property import PropertyCard
from estatemls.schemas.user import BuyerOut


class PaymentSummary(ApiModel):
    id: int
    amount: Money
    payment_method: PaymentMethod
    payment_date: datetime
    status: PaymentStatus
    notes: Optional[str] = None


class PurchaseOut(ApiModel):
    id: int
    property_id: int
    buyer_id: int
    total_amount: Money
    down_payment: Money
    remaining_amount: Money
    status: PurchaseStatus
    notes: Optional[str] = None
    purchase_date: datetime
    completion_date: Optional[datetime] = None
    property: PropertyCard
    buyer: BuyerOut
    payments: List[PaymentSummary] = []


class PurchaseCreate(ApiModel):
    property_id: int
    total_amount: Money
    down_payment: Money
    # accepted for compatibility with older clients; always recomputed server side
    remaining_amount: Optional[Money] = None
    payment_method: Optional[PaymentMethod] = None


class PurchaseUpdate(ApiModel):
    status: Optional[PurchaseStatus] = None
    notes: Optional[str] = None
