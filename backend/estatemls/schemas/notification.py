# backend/estatemls/schemas/notification.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from estatemls.schemas.common import ApiModel


class NotificationOut(ApiModel):
    id: int
    title: str
    message: str
    type: str
    related_to: Optional[str] = None
    is_read: bool
    created_at: datetime


class NotificationList(ApiModel):
    notifications: List[NotificationOut]
    unread_count: int


class MarkRead(ApiModel):
    notification_ids: List[int] = []
    mark_all: bool = False


class MarkReadResult(ApiModel):
    success: bool = True
    updated: int
