"""SQLAlchemy model for a buyer's purchase of a listing."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from estatemls.db.orm_registry import Base, utcnow
from estatemls.models.enums import PurchaseStatus, enum_type
from estatemls.models.payment import Payment


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True)
    property_id = Column(Integer, ForeignKey("properties.id"), nullable=False, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    total_amount = Column(Numeric(14, 2), nullable=False)
    down_payment = Column(Numeric(14, 2), nullable=False)
    remaining_amount = Column(Numeric(14, 2), nullable=False)   # total - sum(payments), never < 0
    status = Column(
        enum_type(PurchaseStatus, "purchase_status"),
        nullable=False,
        default=PurchaseStatus.PENDING,
        index=True,
    )
    notes = Column(Text)

    purchase_date = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    completion_date = Column(DateTime(timezone=True))
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    property = relationship("Property", back_populates="purchases")
    buyer = relationship("User", back_populates="purchases")
    payments = relationship(
        "Payment",
        back_populates="purchase",
        order_by=[Payment.payment_date.desc(), Payment.id.desc()],
    )

    __table_args__ = (
        CheckConstraint("remaining_amount >= 0", name="ck_purchases_remaining_non_negative"),
        CheckConstraint("down_payment > 0 AND down_payment <= total_amount", name="ck_purchases_down_payment"),
    )