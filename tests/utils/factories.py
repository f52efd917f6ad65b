"""Test data factories using Faker."""

from decimal import Decimal
from typing import Optional

from faker import Faker

from estatemls.models import PropertyStatus, UserRole

fake = Faker()


def create_user_data(role: UserRole = UserRole.USER, **overrides) -> dict:
    """Create test user data."""
    data = {
        "external_id": f"idp|{fake.uuid4()}",
        "email": fake.unique.email(),
        "first_name": fake.first_name(),
        "last_name": fake.last_name(),
        "phone": fake.msisdn(),
        "role": role,
    }
    data.update(overrides)
    return data


def create_property_data(
    owner_id: int,
    status: PropertyStatus = PropertyStatus.PUBLISHED,
    agent_id: Optional[int] = None,
    **overrides,
) -> dict:
    """Create test listing data."""
    data = {
        "title": fake.sentence(nb_words=4).rstrip("."),
        "description": fake.text(max_nb_chars=200),
        "address": fake.street_address(),
        "location": fake.city(),
        "property_type": "house",
        "price": Decimal(fake.random_int(min=100000, max=2000000)),
        "status": status,
        "owner_id": owner_id,
        "agent_id": agent_id if agent_id is not None else owner_id,
    }
    data.update(overrides)
    return data
