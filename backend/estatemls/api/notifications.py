# backend/estatemls/api/notifications.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from estatemls.api.deps import get_current_user
from estatemls.core.errors import ValidationError
from estatemls.db.db_connection import get_db
from estatemls.models.user import User
from estatemls.schemas.notification import MarkRead, MarkReadResult, NotificationList
from estatemls.services import notifications

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=NotificationList)
def list_notifications(
    unread: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1, le=500),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows, unread_count = notifications.list_for(db, user, unread_only=unread, limit=limit)
    return {"notifications": rows, "unread_count": unread_count}


@router.post("/read", response_model=MarkReadResult)
def mark_read(
    body: MarkRead,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not body.mark_all and not body.notification_ids:
        raise ValidationError("Provide notificationIds or markAll")
    updated = notifications.mark_read(
        db, user, notification_ids=body.notification_ids, mark_all=body.mark_all
    )
    return {"success": True, "updated": updated}
