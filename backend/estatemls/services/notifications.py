"""In-app notifications for a user."""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from estatemls.models.notification import Notification
from estatemls.models.user import User


def list_for(
    db: Session,
    user: User,
    *,
    unread_only: bool = False,
    limit: Optional[int] = None,
) -> Tuple[List[Notification], int]:
    """Return ``(notifications, unread_count)``, newest first."""
    stmt = select(Notification).where(Notification.user_id == user.id)
    if unread_only:
        stmt = stmt.where(Notification.is_read.is_(False))
    stmt = stmt.order_by(Notification.created_at.desc(), Notification.id.desc())
    if limit:
        stmt = stmt.limit(limit)
    rows = list(db.execute(stmt).scalars().all())

    unread = db.execute(
        select(func.count(Notification.id)).where(
            Notification.user_id == user.id, Notification.is_read.is_(False)
        )
    ).scalar_one()
    return rows, int(unread)


def mark_read(
    db: Session,
    user: User,
    *,
    notification_ids: Optional[Sequence[int]] = None,
    mark_all: bool = False,
) -> int:
    """Mark the caller's notifications read; ids owned by other users are ignored."""
    stmt = update(Notification).where(Notification.user_id == user.id, Notification.is_read.is_(False))
    if not mark_all:
        stmt = stmt.where(Notification.id.in_(list(notification_ids or [])))
    count = db.execute(stmt.values(is_read=True).execution_options(synchronize_session=False)).rowcount
    db.commit()
    return count
