"""Tests for /api/purchases."""

from decimal import Decimal

import pytest

from estatemls.models import Property, PropertyStatus, Purchase, PurchaseStatus
from tests.utils.helpers import identity_headers, open_purchase


@pytest.mark.integration
def test_create_purchase_scenario(client, db, buyer, listing):
    """100000 total with 20000 down leaves 80000 outstanding."""
    body = open_purchase(client, buyer, listing.id, total="100000", down="20000")

    assert body["totalAmount"] == 100000
    assert body["downPayment"] == 20000
    assert body["remainingAmount"] == 80000
    assert body["status"] == "pending"
    assert body["buyerId"] == buyer.id
    assert body["property"]["id"] == listing.id
    assert body["property"]["status"] == "pending"
    assert body["property"]["primaryMedia"]["filePath"] == "properties/cover.jpg"
    assert [p["amount"] for p in body["payments"]] == [20000]
    assert body["payments"][0]["paymentMethod"] == "bank_transfer"


@pytest.mark.integration
def test_client_remaining_amount_is_ignored(client, buyer, listing):
    body = open_purchase(client, buyer, listing.id, total="100000", down="20000", remainingAmount="1")
    assert body["remainingAmount"] == 80000


@pytest.mark.integration
def test_snake_case_input_accepted(client, buyer, listing):
    response = client.post(
        "/api/purchases",
        json={"property_id": listing.id, "total_amount": 100000, "down_payment": 1000, "payment_method": "cash"},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 201
    assert response.json()["payments"][0]["paymentMethod"] == "cash"


@pytest.mark.integration
@pytest.mark.parametrize(
    "total,down,message",
    [
        ("100000", "0", "Down payment must be greater than zero"),
        ("100000", "100001", "Down payment cannot exceed the total amount"),
        ("0", "10", "Total amount must be greater than zero"),
    ],
)
def test_create_purchase_validation(client, buyer, listing, total, down, message):
    response = client.post(
        "/api/purchases",
        json={"propertyId": listing.id, "totalAmount": total, "downPayment": down},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 400
    assert response.json() == {"error": message}


@pytest.mark.integration
@pytest.mark.parametrize("total", ["0.01", "99999.99", "100000.01"])
def test_total_must_match_listing_price(client, db, buyer, listing, total):
    response = client.post(
        "/api/purchases",
        json={"propertyId": listing.id, "totalAmount": total, "downPayment": "0.01"},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Total amount must match the listing price"}

    db.expire_all()
    assert db.get(Property, listing.id).status == PropertyStatus.PUBLISHED
    assert db.query(Purchase).count() == 0


@pytest.mark.integration
def test_listing_side_cannot_buy_own_listing(client, db, agent, listing):
    response = client.post(
        "/api/purchases",
        json={"propertyId": listing.id, "totalAmount": "100000", "downPayment": "20000"},
        headers=identity_headers(agent),
    )
    assert response.status_code == 403

    db.expire_all()
    assert db.get(Property, listing.id).status == PropertyStatus.PUBLISHED


@pytest.mark.integration
def test_create_purchase_missing_fields(client, buyer):
    response = client.post("/api/purchases", json={"totalAmount": 10}, headers=identity_headers(buyer))
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.integration
def test_create_purchase_unknown_property(client, buyer):
    response = client.post(
        "/api/purchases",
        json={"propertyId": 9999, "totalAmount": 10, "downPayment": 5},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 404
    assert response.json() == {"error": "Property not found"}


@pytest.mark.integration
def test_create_purchase_on_unavailable_listing(client, make_property, agent, buyer, make_user):
    draft = make_property(agent, status=PropertyStatus.DRAFT)
    response = client.post(
        "/api/purchases",
        json={"propertyId": draft.id, "totalAmount": 10, "downPayment": 5},
        headers=identity_headers(buyer),
    )
    assert response.status_code == 409

    listed = make_property(agent)
    open_purchase(client, buyer, listed.id)
    rival = make_user()
    response = client.post(
        "/api/purchases",
        json={"propertyId": listed.id, "totalAmount": 10, "downPayment": 5},
        headers=identity_headers(rival),
    )
    assert response.status_code == 409
    assert response.json() == {"error": "Property is not available for purchase"}


@pytest.mark.integration
def test_requires_identity(client, listing):
    response = client.post("/api/purchases", json={"propertyId": listing.id, "totalAmount": 10, "downPayment": 5})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


@pytest.mark.integration
def test_rejects_forged_signature(client, buyer):
    headers = identity_headers(buyer, secret="not-the-real-secret")
    response = client.get("/api/purchases/me", headers=headers)
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid identity signature"}


@pytest.mark.integration
def test_unknown_subject_is_not_found(client):
    response = client.get("/api/purchases/me", headers=identity_headers("idp|never-provisioned"))
    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


@pytest.mark.integration
def test_get_purchase_access(client, buyer, agent, listing, make_user):
    """Buyer and listing agent may read; an unrelated user gets 403."""
    purchase_id = open_purchase(client, buyer, listing.id)["id"]
    stranger = make_user()

    assert client.get(f"/api/purchases/{purchase_id}", headers=identity_headers(buyer)).status_code == 200
    assert client.get(f"/api/purchases/{purchase_id}", headers=identity_headers(agent)).status_code == 200

    response = client.get(f"/api/purchases/{purchase_id}", headers=identity_headers(stranger))
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


@pytest.mark.integration
def test_get_missing_purchase_is_404_before_403(client, make_user):
    stranger = make_user()
    response = client.get("/api/purchases/424242", headers=identity_headers(stranger))
    assert response.status_code == 404
    assert response.json() == {"error": "Purchase not found"}


@pytest.mark.integration
def test_my_purchases_only_lists_own(client, buyer, agent, make_property, make_user):
    other = make_user()
    mine = open_purchase(client, buyer, make_property(agent).id)
    open_purchase(client, other, make_property(agent).id)

    response = client.get("/api/purchases/me", headers=identity_headers(buyer))
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [mine["id"]]


@pytest.mark.integration
def test_list_purchases_scope_and_filter(client, buyer, admin, agent, make_property, make_user):
    other = make_user()
    open_purchase(client, buyer, make_property(agent).id)
    open_purchase(client, other, make_property(agent, price=Decimal("500")).id, total="500", down="500")

    everything = client.get("/api/purchases", headers=identity_headers(admin)).json()
    assert len(everything) == 2

    completed = client.get("/api/purchases", params={"status": "completed"}, headers=identity_headers(admin)).json()
    assert [p["buyerId"] for p in completed] == [other.id]

    own = client.get("/api/purchases", headers=identity_headers(buyer)).json()
    assert [p["buyerId"] for p in own] == [buyer.id]


@pytest.mark.integration
def test_admin_cancels_purchase(client, db, admin, buyer, listing):
    purchase_id = open_purchase(client, buyer, listing.id)["id"]

    response = client.patch(
        f"/api/purchases/{purchase_id}",
        json={"status": "cancelled", "notes": "financing fell through"},
        headers=identity_headers(admin),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "cancelled"
    assert body["notes"] == "financing fell through"

    db.expire_all()
    assert db.get(Property, listing.id).status == PropertyStatus.PUBLISHED
    assert db.get(Purchase, purchase_id).status == PurchaseStatus.CANCELLED


@pytest.mark.integration
def test_update_purchase_rules(client, admin, buyer, listing):
    purchase_id = open_purchase(client, buyer, listing.id)["id"]

    response = client.patch(f"/api/purchases/{purchase_id}", json={"notes": "x"}, headers=identity_headers(buyer))
    assert response.status_code == 403

    response = client.patch(
        f"/api/purchases/{purchase_id}", json={"status": "completed"}, headers=identity_headers(admin)
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Purchase cannot be completed while a balance remains"}
