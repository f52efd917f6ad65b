"""Enumeration types for users, listings, purchases, payments and inquiries."""

from enum import Enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, Enum):
    USER = "user"
    AGENT = "agent"
    ADMIN = "admin"


class PropertyStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    PENDING = "pending"  # under an open purchase
    SOLD = "sold"
    RENTED = "rented"


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    BANK_TRANSFER = "bank_transfer"
    CASH = "cash"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class InquiryStatus(str, Enum):
    PENDING = "pending"
    RESPONDED = "responded"
    CLOSED = "closed"


class ContactMethod(str, Enum):
    EMAIL = "email"
    PHONE = "phone"


def enum_type(enum_cls: type[Enum], name: str) -> SAEnum:
    """Store the lower-case ``.value`` in a VARCHAR + CHECK, portable across postgres/sqlite."""
    return SAEnum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        length=20,
        values_callable=lambda e: [m.value for m in e],
    )
