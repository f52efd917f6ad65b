"""SQLAlchemy model for a single payment against a purchase (append-only ledger)."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow
from estatemls.models.enums import PaymentMethod, PaymentStatus, enum_type


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True)
    purchase_id = Column(Integer, ForeignKey("purchases.id"), nullable=False, index=True)
    amount = Column(Numeric(14, 2), nullable=False)
    payment_method = Column(enum_type(PaymentMethod, "payment_method"), nullable=False)
    status = Column(
        enum_type(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.COMPLETED,
    )
    notes = Column(Text)
    payment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    purchase = relationship("Purchase", back_populates="payments")

    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
    )
