"""Saved listing searches: stored filters a user can re-run."""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from estatemls.core.errors import NotFoundError, ValidationError
from estatemls.models.enums import PropertyStatus
from estatemls.models.property import Property
from estatemls.models.saved_search import SavedSearch
from estatemls.models.user import User
from estatemls.services import properties

logger = logging.getLogger(__name__)


def _decimal(value: Any) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Drop empty filters and reject price ranges that can never match."""
    cleaned = {k: v for k, v in (params or {}).items() if v is not None}
    low, high = _decimal(cleaned.get("min_price")), _decimal(cleaned.get("max_price"))
    if (low is not None and low < 0) or (high is not None and high < 0):
        raise ValidationError("Price filters cannot be negative")
    if low is not None and high is not None and low > high:
        raise ValidationError("Minimum price cannot exceed maximum price")
    return cleaned


def list_saved_searches(db: Session, user: User) -> List[SavedSearch]:
    stmt = (
        select(SavedSearch)
        .where(SavedSearch.user_id == user.id)
        .order_by(SavedSearch.created_at.desc(), SavedSearch.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def get_saved_search(db: Session, user: User, search_id: int) -> SavedSearch:
    # another user's search answers 404, same as a missing one
    search = db.get(SavedSearch, search_id)
    if search is None or search.user_id != user.id:
        raise NotFoundError("Saved search not found")
    return search


def create_saved_search(
    db: Session,
    user: User,
    *,
    name: str,
    search_params: Optional[Dict[str, Any]] = None,
    notifications_enabled: bool = False,
) -> SavedSearch:
    search = SavedSearch(
        user_id=user.id,
        name=name,
        search_params=_clean_params(search_params),
        notifications_enabled=notifications_enabled,
    )
    db.add(search)
    db.commit()
    logger.info("saved search created", extra={"search_id": search.id, "user_id": user.id})
    return search


def update_saved_search(db: Session, user: User, search_id: int, data: Dict[str, Any]) -> SavedSearch:
    search = get_saved_search(db, user, search_id)
    if data.get("name") is not None:
        search.name = data["name"]
    if data.get("notifications_enabled") is not None:
        search.notifications_enabled = data["notifications_enabled"]
    if data.get("search_params") is not None:
        # reassign; the JSON column does not track in-place mutation
        search.search_params = _clean_params(data["search_params"])
    db.commit()
    return search


def delete_saved_search(db: Session, user: User, search_id: int) -> None:
    search = get_saved_search(db, user, search_id)
    db.delete(search)
    db.commit()


def run_saved_search(db: Session, user: User, search_id: int, *, limit: Optional[int] = None) -> List[Property]:
    """Listings matching the stored filters; published ones unless a status was saved."""
    params = get_saved_search(db, user, search_id).search_params or {}
    status = params.get("status")
    return properties.list_properties(
        db,
        status=PropertyStatus(status) if status else PropertyStatus.PUBLISHED,
        property_type=params.get("property_type"),
        location=params.get("location"),
        min_price=_decimal(params.get("min_price")),
        max_price=_decimal(params.get("max_price")),
        limit=limit,
    )
