"""Verification of identity assertions forwarded by the identity provider edge.

The edge authenticates the browser session and forwards three headers:

- ``X-Identity-Subject``: provider user id
- ``X-Identity-Timestamp``: unix seconds when the assertion was signed
- ``X-Identity-Signature``: ``v0=`` + hex HMAC-SHA256 of ``v0:<timestamp>:<subject>``
"""

import hashlib
import hmac
import logging
import time
from dataclasses import dataclass
from typing import Optional

from estatemls.core.errors import UnauthorizedError
from estatemls.core.settings import settings

logger = logging.getLogger(__name__)

SUBJECT_HEADER = "X-Identity-Subject"
TIMESTAMP_HEADER = "X-Identity-Timestamp"
SIGNATURE_HEADER = "X-Identity-Signature"


@dataclass(frozen=True)
class Identity:
    subject: str


def sign_subject(secret: str, timestamp: str, subject: str) -> str:
    """Signature the edge is expected to send for ``subject`` at ``timestamp``."""
    base = f"v0:{timestamp}:{subject}"
    digest = hmac.new(secret.encode("utf-8"), base.encode("utf-8"), hashlib.sha256).hexdigest()
    return f"v0={digest}"


def verify_signature(
    secret: str,
    timestamp: str,
    subject: str,
    signature: str,
    max_skew: int = 300,
    now: Optional[int] = None,
) -> bool:
    if not secret or not timestamp or not subject or not signature:
        return False

    try:
        ts = int(timestamp)
    except ValueError:
        return False

    current = int(time.time()) if now is None else now
    if abs(current - ts) > max_skew:
        logger.warning("identity assertion outside replay window", extra={"skew": current - ts})
        return False

    expected = sign_subject(secret, timestamp, subject)
    return hmac.compare_digest(expected, signature)


def resolve_identity(
    subject: Optional[str],
    timestamp: Optional[str],
    signature: Optional[str],
) -> Identity:
    """Return the verified identity or raise :class:`UnauthorizedError`."""
    if not subject:
        raise UnauthorizedError()

    if settings.IDENTITY_BYPASS_VERIFY:
        logger.debug("identity verification bypassed")
        return Identity(subject=subject)

    secret = settings.IDENTITY_SIGNING_SECRET.strip()
    if not secret:
        logger.error("IDENTITY_SIGNING_SECRET not set; rejecting request")
        raise UnauthorizedError()

    if not verify_signature(
        secret,
        timestamp or "",
        subject,
        signature or "",
        max_skew=settings.IDENTITY_MAX_SKEW_SECONDS,
    ):
        raise UnauthorizedError("Invalid identity signature")

    return Identity(subject=subject)
