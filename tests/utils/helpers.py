"""Test helper functions."""

import time
from typing import Optional, Union

from estatemls.models import User
from estatemls.services.identity import (
    SIGNATURE_HEADER,
    SUBJECT_HEADER,
    TIMESTAMP_HEADER,
    sign_subject,
)

TEST_SECRET = "test-identity-secret"


def identity_headers(
    who: Union[User, str],
    secret: str = TEST_SECRET,
    timestamp: Optional[int] = None,
) -> dict:
    """Headers the identity edge would forward for ``who``."""
    subject = who.external_id if isinstance(who, User) else who
    ts = str(int(time.time()) if timestamp is None else timestamp)
    return {
        SUBJECT_HEADER: subject,
        TIMESTAMP_HEADER: ts,
        SIGNATURE_HEADER: sign_subject(secret, ts, subject),
    }


def open_purchase(client, buyer: User, property_id: int, total="100000", down="20000", **extra) -> dict:
    """POST /api/purchases and return the JSON body (asserts 201)."""
    payload = {"propertyId": property_id, "totalAmount": total, "downPayment": down}
    payload.update(extra)
    response = client.post("/api/purchases", json=payload, headers=identity_headers(buyer))
    assert response.status_code == 201, response.text
    return response.json()
