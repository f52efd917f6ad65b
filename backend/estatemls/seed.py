# backend/estatemls/seed.py
"""Insert demo users, listings and one open purchase.

Run after ``alembic upgrade head``::

    python -m estatemls.seed
"""
from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select

from estatemls.core.logging import setup_logging
from estatemls.db import SessionLocal, init_db
from estatemls.models import AgentProfile, Property, PropertyMedia, PropertyStatus, User, UserRole
from estatemls.services import purchases

logger = logging.getLogger(__name__)

USERS = [
    {"external_id": "demo|admin", "email": "admin@estatemls.com", "first_name": "Ada", "last_name": "Admin", "role": UserRole.ADMIN},
    {"external_id": "demo|agent", "email": "agent@estatemls.com", "first_name": "Mwila", "last_name": "Banda", "role": UserRole.AGENT},
    {"external_id": "demo|buyer", "email": "buyer@estatemls.com", "first_name": "Chanda", "last_name": "Phiri", "role": UserRole.USER},
]

AGENT_PROFILE = {
    "license_number": "ZIEA-0042",
    "agency": "Copperbelt Realty",
    "experience_years": 8,
    "bio": "Residential sales across Lusaka East.",
    "location": "Lusaka",
    "specialization": "residential",
    "rating": Decimal("4.60"),
}

PROPERTIES = [
    {"title": "3 Bedroom House in Kabulonga", "address": "12 Kabulonga Rd", "location": "Lusaka", "property_type": "house", "price": Decimal("1850000.00")},
    {"title": "Apartment near Levy Junction", "address": "45 Church Rd", "location": "Lusaka", "property_type": "apartment", "price": Decimal("950000.00")},
    {"title": "Plot in Ibex Hill", "address": "Plot 221 Ibex Hill", "location": "Lusaka", "property_type": "land", "price": Decimal("400000.00")},
]


def _get_or_create_user(db, data) -> User:
    user = db.execute(select(User).where(User.external_id == data["external_id"])).scalar_one_or_none()
    if user is None:
        user = User(**data)
        db.add(user)
        db.flush()
    return user


def seed() -> None:
    init_db()
    with SessionLocal() as db:
        admin, agent, buyer = (_get_or_create_user(db, u) for u in USERS)
        if agent.agent_profile is None:
            agent.agent_profile = AgentProfile(**AGENT_PROFILE)
        db.commit()

        if db.execute(select(Property.id).limit(1)).first() is not None:
            logger.info("properties already present; skipping listings")
            return

        listings = []
        for i, data in enumerate(PROPERTIES):
            prop = Property(
                **data,
                description=f"Demo listing #{i + 1}",
                status=PropertyStatus.PUBLISHED,
                owner_id=agent.id,
                agent_id=agent.id,
            )
            prop.media.append(
                PropertyMedia(file_path=f"properties/demo-{i + 1}/cover.jpg", is_primary=True)
            )
            db.add(prop)
            listings.append(prop)
        db.commit()
        logger.info("listings inserted", extra={"count": len(listings)})

        first = listings[0]
        purchase = purchases.create_purchase(
            db,
            buyer,
            property_id=first.id,
            total_amount=first.price,
            down_payment=Decimal("370000.00"),
        )
        logger.info("demo purchase opened", extra={"purchase_id": purchase.id})


if __name__ == "__main__":
    setup_logging()
    seed()
