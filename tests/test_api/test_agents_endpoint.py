"""Tests for /api/agents."""

from decimal import Decimal

import pytest

from estatemls.models import AgentProfile, PropertyStatus, UserRole
from tests.utils.helpers import identity_headers


@pytest.fixture
def directory(db, make_user, make_property):
    """A rated agent with two listings (one sold) and an agent without a profile."""
    top = make_user(role=UserRole.AGENT, first_name="Mwila", last_name="Banda")
    db.add(AgentProfile(user_id=top.id, agency="Copperbelt Realty", rating=Decimal("4.80"), location="Lusaka"))
    db.commit()
    make_property(top)
    make_property(top, status=PropertyStatus.SOLD)
    make_property(top, status=PropertyStatus.DRAFT)
    newcomer = make_user(role=UserRole.AGENT)
    make_user(role=UserRole.ADMIN)
    return top, newcomer


@pytest.mark.integration
def test_list_agents(client, directory):
    top, newcomer = directory
    response = client.get("/api/agents")
    assert response.status_code == 200
    body = response.json()

    assert [a["id"] for a in body["agents"]] == [top.id, newcomer.id]
    first = body["agents"][0]
    assert first["name"] == "Mwila Banda"
    assert first["agency"] == "Copperbelt Realty"
    assert first["rating"] == 4.8
    assert first["performance"] == "Excellent"
    assert first["propertyCount"] == 3
    assert first["soldPropertyCount"] == 1

    last = body["agents"][1]
    assert last["rating"] is None
    assert last["performance"] == "Average"
    assert last["propertyCount"] == 0

    assert body["stats"] == {
        "totalAgents": 2,
        "averageRating": 2.4,
        "totalProperties": 3,
        "totalSoldProperties": 1,
    }


@pytest.mark.integration
def test_empty_directory(client):
    body = client.get("/api/agents").json()
    assert body["agents"] == []
    assert body["stats"]["averageRating"] == 0


@pytest.mark.integration
def test_agent_profile_lists_public_listings(client, buyer, directory):
    top, _ = directory
    response = client.get(f"/api/agents/{top.id}", headers=identity_headers(buyer))
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == top.id
    assert body["location"] == "Lusaka"
    assert sorted(p["status"] for p in body["listings"]) == ["published", "sold"]
    assert body["propertyCount"] == 3


@pytest.mark.integration
def test_agent_profile_requires_identity(client, directory):
    top, _ = directory
    assert client.get(f"/api/agents/{top.id}").status_code == 401


@pytest.mark.integration
def test_agent_profile_not_found(client, buyer):
    for agent_id in (buyer.id, 9999):
        response = client.get(f"/api/agents/{agent_id}", headers=identity_headers(buyer))
        assert response.status_code == 404
        assert response.json() == {"error": "Agent not found"}
