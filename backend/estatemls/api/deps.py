# backend/estatemls/api/deps.py
from __future__ import annotations

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from estatemls.db.db_connection import get_db
from estatemls.models.user import User
from estatemls.services import users
from estatemls.services.identity import (
    SIGNATURE_HEADER,
    SUBJECT_HEADER,
    TIMESTAMP_HEADER,
    Identity,
    resolve_identity,
)


def get_identity(
    subject: Optional[str] = Header(None, alias=SUBJECT_HEADER),
    timestamp: Optional[str] = Header(None, alias=TIMESTAMP_HEADER),
    signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
) -> Identity:
    """401 unless the edge forwarded a valid signed subject."""
    return resolve_identity(subject, timestamp, signature)


def get_current_user(
    identity: Identity = Depends(get_identity),
    db: Session = Depends(get_db),
) -> User:
    return users.get_by_subject(db, identity.subject)


def get_optional_user(
    subject: Optional[str] = Header(None, alias=SUBJECT_HEADER),
    timestamp: Optional[str] = Header(None, alias=TIMESTAMP_HEADER),
    signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """Guests get None; a subject header that is present must still verify."""
    if subject is None:
        return None
    identity = resolve_identity(subject, timestamp, signature)
    return users.find_by_subject(db, identity.subject)
