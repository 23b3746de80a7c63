"""Authorization claims carried by a verified bearer token."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from shop.auth.errors import InvalidClaimsError


class Role(str, Enum):
    """Closed set of roles a caller may hold."""

    ADMIN = "ADMIN"
    USER = "USER"


def _timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value.astimezone(UTC)
    return datetime.fromtimestamp(int(value), tz=UTC)


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Identity and role set extracted from a token.

    Claims are built per request and handed explicitly to every service call
    that needs authorization; they are never persisted.

    :param subject: Identifier of the authenticated user (``sub``).
    :param issuer: Token issuer (``iss``).
    :param audience: Intended audience (``aud``).
    :param expires_at: Expiry instant (``exp``), timezone-aware UTC.
    :param issued_at: Issue instant (``iat``), timezone-aware UTC.
    :param roles: Role names held by the subject.
    """

    subject: str
    issuer: str
    audience: str
    expires_at: datetime
    issued_at: datetime
    roles: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def build(
        cls,
        *,
        subject: str,
        roles: Iterable[str | Role],
        issuer: str,
        audience: str,
        issued_at: datetime,
        expires_at: datetime,
    ) -> Claims:
        """Create claims normalising role values and timestamps."""
        return cls(
            subject=str(subject),
            issuer=issuer,
            audience=audience,
            expires_at=_timestamp(expires_at),
            issued_at=_timestamp(issued_at),
            roles=frozenset(r.value if isinstance(r, Role) else str(r) for r in roles),
        )

    def authorized(self, *roles: str | Role) -> bool:
        """Return ``True`` when any of ``roles`` is held. No hierarchy applies."""
        wanted = {r.value if isinstance(r, Role) else str(r) for r in roles}
        return bool(wanted & self.roles)

    def can_access(self, resource_id: str) -> bool:
        """Return ``True`` for admins or when ``resource_id`` is the subject."""
        return self.authorized(Role.ADMIN) or str(resource_id) == self.subject

    def to_payload(self) -> dict[str, Any]:
        """Serialize into registered JWT claim names."""
        return {
            "sub": self.subject,
            "iss": self.issuer,
            "aud": self.audience,
            "exp": int(self.expires_at.timestamp()),
            "iat": int(self.issued_at.timestamp()),
            "roles": sorted(self.roles),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Claims:
        """Rebuild claims from a decoded JWT payload.

        :raises KeyError: When ``sub``, ``exp`` or ``iat`` is missing.
        :raises InvalidClaimsError: When ``roles`` is not a list of strings.
        """
        roles = payload.get("roles") or ()
        if not isinstance(roles, list | tuple) or not all(isinstance(r, str) for r in roles):
            raise InvalidClaimsError("roles claim must be a list of strings")
        audience = payload.get("aud", "")
        if isinstance(audience, list | tuple):
            audience = audience[0] if audience else ""
        return cls.build(
            subject=payload["sub"],
            roles=roles,
            issuer=payload.get("iss", ""),
            audience=str(audience),
            issued_at=payload["iat"],
            expires_at=payload["exp"],
        )
