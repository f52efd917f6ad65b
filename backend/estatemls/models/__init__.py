from .agent_profile import AgentProfile
from .enums import (
    ContactMethod,
    InquiryStatus,
    PaymentMethod,
    PaymentStatus,
    PropertyStatus,
    PurchaseStatus,
    UserRole,
)
from .favorite import Favorite
from .inquiry import PropertyInquiry
from .notification import Notification
from .payment import Payment
from .property import Property, PropertyMedia
from .purchase import Purchase
from .saved_search import SavedSearch
from .user import User

__all__ = [
    "AgentProfile",
    "ContactMethod",
    "Favorite",
    "InquiryStatus",
    "Notification",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "Property",
    "PropertyInquiry",
    "PropertyMedia",
    "PropertyStatus",
    "Purchase",
    "PurchaseStatus",
    "SavedSearch",
    "User",
    "UserRole",
]
