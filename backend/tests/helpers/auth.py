"""Token helpers shared across test modules."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

from shop.auth import Claims, get_issuer

KID = "test-signing-key"
ISSUER = "shop backend"
AUDIENCE = "shop"


def make_claims(
    *,
    subject: str | None = None,
    roles=("USER",),
    issued_at: datetime | None = None,
    ttl: timedelta = timedelta(hours=1),
    issuer: str = ISSUER,
    audience: str = AUDIENCE,
) -> Claims:
    """Build claims for a caller; a random subject is used when omitted."""
    issued_at = (issued_at or datetime.now(UTC)).replace(microsecond=0)
    return Claims.build(
        subject=subject or str(uuid.uuid4()),
        roles=roles,
        issuer=issuer,
        audience=audience,
        issued_at=issued_at,
        expires_at=issued_at + ttl,
    )


def bearer(app, claims: Claims, kid: str = KID) -> dict[str, str]:
    """Return an ``Authorization`` header carrying a token for ``claims``."""
    with app.app_context():
        token = get_issuer().generate(kid, claims)
    return {"Authorization": f"Bearer {token}"}
