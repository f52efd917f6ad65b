# backend/estatemls/schemas/payment.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from estatemls.models.enums import PaymentMethod, PurchaseStatus
from estatemls.schemas.common import ApiModel, Money
from estatemls.schemas.property import PropertyBrief
from estatemls.schemas.purchase import PaymentSummary, PurchaseOut
from estatemls.schemas.user import BuyerOut


class PaymentPurchase(ApiModel):
    id: int
    property_id: int
    buyer_id: int
    total_amount: Money
    down_payment: Money
    remaining_amount: Money
    status: PurchaseStatus
    purchase_date: datetime
    completion_date: Optional[datetime] = None
    property: PropertyBrief
    buyer: BuyerOut


class PaymentOut(PaymentSummary):
    purchase_id: int
    purchase: PaymentPurchase


class PaymentCreate(ApiModel):
    purchase_id: int
    amount: Money
    payment_method: PaymentMethod


class AdminPaymentCreate(PaymentCreate):
    notes: Optional[str] = None


class PaymentResult(ApiModel):
    payment: PaymentOut
    purchase: PurchaseOut
