"""Tests for /api/properties."""

from decimal import Decimal

import pytest

from estatemls.models import PropertyStatus, UserRole
from tests.utils.helpers import identity_headers, open_purchase


@pytest.mark.integration
def test_list_properties_filters(client, agent, make_property):
    make_property(agent, price=Decimal("150000"), location="Lusaka", property_type="house")
    make_property(agent, price=Decimal("900000"), location="Lusaka", property_type="apartment")
    make_property(agent, price=Decimal("200000"), location="Ndola", property_type="house")
    make_property(agent, status=PropertyStatus.DRAFT, price=Decimal("120000"), location="Lusaka")

    response = client.get(
        "/api/properties",
        params={"status": "published", "location": "Lusaka", "maxPrice": "500000"},
    )
    assert response.status_code == 200
    rows = response.json()["properties"]
    assert len(rows) == 1
    assert rows[0]["price"] == 150000
    assert rows[0]["primaryMedia"]["isPrimary"] is True

    houses = client.get("/api/properties", params={"propertyType": "house", "minPrice": "160000"}).json()
    assert [p["price"] for p in houses["properties"]] == [200000]

    assert len(client.get("/api/properties", params={"limit": 2}).json()["properties"]) == 2


@pytest.mark.integration
def test_get_property(client, listing):
    response = client.get(f"/api/properties/{listing.id}")
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == listing.title
    assert body["ownerId"] == listing.owner_id
    assert len(body["media"]) == 1

    assert client.get("/api/properties/9999").status_code == 404


@pytest.mark.integration
def test_agent_creates_draft_listing(client, agent):
    response = client.post(
        "/api/properties",
        json={"title": "Garden flat", "address": "7 Leopards Hill Rd", "price": "650000", "propertyType": "apartment"},
        headers=identity_headers(agent),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "draft"
    assert body["ownerId"] == agent.id
    assert body["agentId"] == agent.id
    assert body["primaryMedia"] is None


@pytest.mark.integration
def test_create_listing_rejects_unknown_agent(client, agent, buyer):
    for agent_id in (9999, buyer.id):
        response = client.post(
            "/api/properties",
            json={"title": "Garden flat", "address": "7 Leopards Hill Rd", "price": "650000", "agentId": agent_id},
            headers=identity_headers(agent),
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid agent"}


@pytest.mark.integration
def test_reassign_listing_agent(client, db, agent, buyer, listing, make_user):
    response = client.patch(
        f"/api/properties/{listing.id}", json={"agentId": buyer.id}, headers=identity_headers(agent)
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid agent"}

    colleague = make_user(role=UserRole.AGENT)
    response = client.patch(
        f"/api/properties/{listing.id}", json={"agentId": colleague.id}, headers=identity_headers(agent)
    )
    assert response.status_code == 200
    assert response.json()["agentId"] == colleague.id


@pytest.mark.integration
def test_regular_user_cannot_create_listing(client, buyer):
    response = client.post(
        "/api/properties",
        json={"title": "x", "address": "y", "price": 1},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 403


@pytest.mark.integration
def test_owner_publishes_and_edits(client, agent, make_property):
    draft = make_property(agent, status=PropertyStatus.DRAFT)

    response = client.patch(
        f"/api/properties/{draft.id}",
        json={"status": "published", "price": "125000.50"},
        headers=identity_headers(agent),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "published"
    assert response.json()["price"] == 125000.5


@pytest.mark.integration
def test_update_property_guards(client, agent, buyer, listing):
    assert client.patch(
        f"/api/properties/{listing.id}", json={"title": "mine now"}, headers=identity_headers(buyer)
    ).status_code == 403

    response = client.patch(
        f"/api/properties/{listing.id}", json={"status": "sold"}, headers=identity_headers(agent)
    )
    assert response.status_code == 400

    open_purchase(client, buyer, listing.id)
    response = client.patch(
        f"/api/properties/{listing.id}", json={"status": "published"}, headers=identity_headers(agent)
    )
    assert response.status_code == 409


@pytest.mark.integration
def test_delete_property(client, agent, buyer, make_property):
    free = make_property(agent)
    assert client.delete(f"/api/properties/{free.id}", headers=identity_headers(agent)).status_code == 204
    assert client.get(f"/api/properties/{free.id}").status_code == 404

    taken = make_property(agent)
    open_purchase(client, buyer, taken.id)
    response = client.delete(f"/api/properties/{taken.id}", headers=identity_headers(agent))
    assert response.status_code == 409
    assert response.json() == {"error": "Property is referenced by a purchase and cannot be deleted"}


@pytest.mark.integration
def test_media_single_primary(client, agent, make_property):
    """A new primary item demotes the previous one."""
    prop = make_property(agent, with_media=False)
    headers = identity_headers(agent)

    first = client.post(f"/api/properties/{prop.id}/media", json={"filePath": "a.jpg"}, headers=headers)
    assert first.status_code == 201
    assert first.json()["isPrimary"] is True

    second = client.post(f"/api/properties/{prop.id}/media", json={"filePath": "b.jpg", "sortOrder": 1}, headers=headers)
    assert second.json()["isPrimary"] is False

    third = client.post(
        f"/api/properties/{prop.id}/media", json={"filePath": "c.jpg", "isPrimary": True, "sortOrder": 2}, headers=headers
    )
    assert third.json()["isPrimary"] is True

    body = client.get(f"/api/properties/{prop.id}").json()
    assert [m["filePath"] for m in body["media"] if m["isPrimary"]] == ["c.jpg"]
    assert body["primaryMedia"]["filePath"] == "c.jpg"


@pytest.mark.integration
def test_media_requires_listing_side(client, buyer, listing):
    response = client.post(f"/api/properties/{listing.id}/media", json={"filePath": "x.jpg"}, headers=identity_headers(buyer))
    assert response.status_code == 403
