"""Read-only agent directory and profiles."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session, selectinload

from estatemls.core.errors import NotFoundError
from estatemls.models.agent_profile import AgentProfile
from estatemls.models.enums import PropertyStatus, UserRole
from estatemls.models.property import Property
from estatemls.models.user import User

# lowest rating for each label, checked top-down
PERFORMANCE_BANDS = (
    (Decimal("4.5"), "Excellent"),
    (Decimal("4"), "Good"),
    (Decimal("3"), "Average"),
)


def performance_label(rating: Optional[Decimal]) -> str:
    if rating is None:
        return "Average"
    for floor, label in PERFORMANCE_BANDS:
        if rating >= floor:
            return label
    return "Fair"


@dataclass
class AgentSummary:
    user: User
    property_count: int = 0
    sold_property_count: int = 0
    listings: List[Property] = field(default_factory=list)

    def _profile(self, name: str) -> Any:
        return getattr(self.user.agent_profile, name, None)

    @property
    def id(self) -> int:
        return self.user.id

    @property
    def name(self) -> str:
        return self.user.full_name or self.user.email

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def phone(self) -> Optional[str]:
        return self.user.phone

    @property
    def agency(self) -> Optional[str]:
        return self._profile("agency")

    @property
    def bio(self) -> Optional[str]:
        return self._profile("bio")

    @property
    def location(self) -> Optional[str]:
        return self._profile("location")

    @property
    def specialization(self) -> Optional[str]:
        return self._profile("specialization")

    @property
    def license_number(self) -> Optional[str]:
        return self._profile("license_number")

    @property
    def experience_years(self) -> Optional[int]:
        return self._profile("experience_years")

    @property
    def rating(self) -> Optional[float]:
        rating = self._profile("rating")
        return float(rating) if rating is not None else None

    @property
    def performance(self) -> str:
        return performance_label(self._profile("rating"))


def _listing_counts(db: Session, agent_ids: Iterable[int]) -> Dict[int, Tuple[int, int]]:
    """``{agent_id: (all listings, sold listings)}``."""
    ids = list(agent_ids)
    if not ids:
        return {}
    sold = func.sum(case((Property.status == PropertyStatus.SOLD, 1), else_=0))
    rows = db.execute(
        select(Property.agent_id, func.count(Property.id), sold)
        .where(Property.agent_id.in_(ids))
        .group_by(Property.agent_id)
    ).all()
    return {agent_id: (int(total), int(sold_count or 0)) for agent_id, total, sold_count in rows}


def list_agents(db: Session) -> Tuple[List[AgentSummary], Dict[str, Any]]:
    """All agents, best rated first (unrated last), plus directory totals.

    Unrated agents count as 0 in the average rating.
    """
    users = db.execute(
        select(User)
        .outerjoin(AgentProfile, AgentProfile.user_id == User.id)
        .where(User.role == UserRole.AGENT)
        .options(selectinload(User.agent_profile))
        .order_by(AgentProfile.rating.is_(None), AgentProfile.rating.desc(), User.id)
    ).scalars().all()

    counts = _listing_counts(db, (u.id for u in users))
    rows = [AgentSummary(u, *counts.get(u.id, (0, 0))) for u in users]

    total_rating = sum((r.rating or 0.0) for r in rows)
    stats = {
        "total_agents": len(rows),
        "average_rating": round(total_rating / len(rows), 1) if rows else 0.0,
        "total_properties": sum(r.property_count for r in rows),
        "total_sold_properties": sum(r.sold_property_count for r in rows),
    }
    return rows, stats


def get_agent(db: Session, agent_id: int) -> AgentSummary:
    """One agent with their public (non-draft) listings, newest first."""
    user = db.execute(
        select(User).where(User.id == agent_id).options(selectinload(User.agent_profile))
    ).scalar_one_or_none()
    if user is None or user.role != UserRole.AGENT:
        raise NotFoundError("Agent not found")

    listings = db.execute(
        select(Property)
        .where(Property.agent_id == agent_id, Property.status != PropertyStatus.DRAFT)
        .options(selectinload(Property.media))
        .order_by(Property.created_at.desc(), Property.id.desc())
    ).scalars().all()

    total, sold = _listing_counts(db, [agent_id]).get(agent_id, (0, 0))
    return AgentSummary(user, total, sold, list(listings))
