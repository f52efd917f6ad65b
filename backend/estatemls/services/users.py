"""User lookup by identity-provider subject, provisioning and role changes."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from estatemls.core.errors import NotFoundError
from estatemls.models.enums import UserRole
from estatemls.models.user import User
from estatemls.services.policy import Action, authorize

logger = logging.getLogger(__name__)


def find_by_subject(db: Session, subject: str) -> Optional[User]:
    return db.execute(select(User).where(User.external_id == subject)).scalar_one_or_none()


def get_by_subject(db: Session, subject: str) -> User:
    user = find_by_subject(db, subject)
    if user is None:
        raise NotFoundError("User not found")
    return user


def provision(
    db: Session,
    subject: str,
    *,
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
) -> User:
    """Create the local user for ``subject`` or refresh its profile fields.

    New users always start with the ``user`` role.
    """
    user = find_by_subject(db, subject)
    if user is None:
        user = User(external_id=subject, email=email, role=UserRole.USER)
        db.add(user)
        logger.info("user provisioned", extra={"subject": subject})
    else:
        user.email = email
    for field, value in (("first_name", first_name), ("last_name", last_name), ("phone", phone)):
        if value is not None:
            setattr(user, field, value)
    db.commit()
    return user


def change_role(db: Session, subject: User, user_id: int, role: UserRole) -> User:
    target = db.get(User, user_id)
    if target is None:
        raise NotFoundError("User not found")
    authorize(subject, Action.USER_MANAGE, target)

    previous = target.role
    target.role = role
    db.commit()
    logger.info(
        "role changed",
        extra={"user_id": user_id, "from_role": previous.value, "to_role": role.value, "by": subject.id},
    )
    return target
