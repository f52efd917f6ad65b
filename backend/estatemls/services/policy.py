"""Single place that decides who may do what.

``evaluate(subject, action, resource)`` is the only role check in the codebase;
handlers and services call :func:`authorize` instead of inspecting roles.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Optional

from estatemls.core.errors import ForbiddenError
from estatemls.models.enums import UserRole
from estatemls.models.payment import Payment
from estatemls.models.property import Property
from estatemls.models.purchase import Purchase
from estatemls.models.user import User


class Action(str, Enum):
    PURCHASE_CREATE = "purchase:create"
    PURCHASE_READ = "purchase:read"
    PURCHASE_PAY = "purchase:pay"
    PURCHASE_UPDATE = "purchase:update"
    PAYMENT_READ = "payment:read"
    PAYMENT_RECORD = "payment:record"
    INVOICE_GENERATE = "invoice:generate"
    PROPERTY_CREATE = "property:create"
    PROPERTY_UPDATE = "property:update"
    PROPERTY_DELETE = "property:delete"
    PROPERTY_MEDIA = "property:media"
    INQUIRY_READ = "inquiry:read"
    INQUIRY_UPDATE = "inquiry:update"
    USER_MANAGE = "user:manage"
    LIST_ALL = "list:all"


# ───── resource helpers ─────
def _purchase_of(resource: object) -> Optional[Purchase]:
    if isinstance(resource, Purchase):
        return resource
    if isinstance(resource, Payment):
        return resource.purchase
    return None


def _is_buyer(subject: User, resource: object) -> bool:
    purchase = _purchase_of(resource)
    return purchase is not None and purchase.buyer_id == subject.id


def _manages_property(subject: User, prop: Optional[Property]) -> bool:
    if prop is None:
        return False
    return subject.id in (prop.owner_id, prop.agent_id)


def _is_buyer_or_listing_side(subject: User, resource: object) -> bool:
    if _is_buyer(subject, resource):
        return True
    purchase = _purchase_of(resource)
    return purchase is not None and _manages_property(subject, purchase.property)


def _is_property_side(subject: User, resource: object) -> bool:
    return isinstance(resource, Property) and _manages_property(subject, resource)


def _is_not_property_side(subject: User, resource: object) -> bool:
    # owners and agents cannot buy their own listing
    return isinstance(resource, Property) and not _manages_property(subject, resource)


def _is_agent(subject: User, resource: object) -> bool:
    return subject.role == UserRole.AGENT


def _nobody(subject: User, resource: object) -> bool:
    return False


# admins bypass this table entirely
RULES: Dict[Action, Callable[[User, object], bool]] = {
    Action.PURCHASE_CREATE: _is_not_property_side,
    Action.PURCHASE_READ: _is_buyer_or_listing_side,
    Action.PURCHASE_PAY: _is_buyer,
    Action.PURCHASE_UPDATE: _nobody,
    Action.PAYMENT_READ: _is_buyer,
    Action.PAYMENT_RECORD: _nobody,
    Action.INVOICE_GENERATE: _is_buyer,
    Action.PROPERTY_CREATE: _is_agent,
    Action.PROPERTY_UPDATE: _is_property_side,
    Action.PROPERTY_DELETE: _is_property_side,
    Action.PROPERTY_MEDIA: _is_property_side,
    Action.INQUIRY_READ: _is_property_side,
    Action.INQUIRY_UPDATE: _is_property_side,
    Action.USER_MANAGE: _nobody,
    Action.LIST_ALL: _nobody,
}


def evaluate(subject: Optional[User], action: Action, resource: object = None) -> bool:
    """Return True when ``subject`` may perform ``action`` on ``resource``."""
    if subject is None:
        return False
    if subject.role == UserRole.ADMIN:
        return True
    rule = RULES.get(action, _nobody)
    return rule(subject, resource)


def authorize(subject: Optional[User], action: Action, resource: object = None) -> None:
    if not evaluate(subject, action, resource):
        raise ForbiddenError()
