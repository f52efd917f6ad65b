"""Server-side favorites so saved listings follow the user across devices."""
from __future__ import annotations

from typing import List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from estatemls.core.errors import NotFoundError
from estatemls.models.favorite import Favorite
from estatemls.models.property import Property
from estatemls.models.user import User


def list_favorites(db: Session, user: User) -> List[Property]:
    stmt = (
        select(Property)
        .join(Favorite, Favorite.property_id == Property.id)
        .where(Favorite.user_id == user.id)
        .options(selectinload(Property.media))
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
    )
    return list(db.execute(stmt).scalars().all())


def add_favorite(db: Session, user: User, property_id: int) -> None:
    """Idempotent: saving an already-saved listing is a no-op."""
    if db.get(Property, property_id) is None:
        raise NotFoundError("Property not found")
    existing = db.execute(
        select(Favorite).where(Favorite.user_id == user.id, Favorite.property_id == property_id)
    ).scalar_one_or_none()
    if existing is None:
        db.add(Favorite(user_id=user.id, property_id=property_id))
        db.commit()


def remove_favorite(db: Session, user: User, property_id: int) -> None:
    db.execute(delete(Favorite).where(Favorite.user_id == user.id, Favorite.property_id == property_id))
    db.commit()
