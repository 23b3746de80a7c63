"""
Token verification failures.

Every failure derives from :class:`AuthenticationError` so callers can treat
them uniformly (HTTP 401, never retried) while tests and logs still see the
precise cause.
"""

from __future__ import annotations


class AuthenticationError(Exception):
    """Base class for bearer token rejections."""

    reason = "authentication failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)


class UnknownKeyError(AuthenticationError):
    """The token names a ``kid`` the key store does not hold."""

    reason = "unknown signing key"

    def __init__(self, kid: str | None = None) -> None:
        self.kid = kid
        super().__init__(f"{self.reason}: {kid}" if kid else None)


class MalformedTokenError(AuthenticationError):
    """The token cannot be parsed, or its header lacks a ``kid``."""

    reason = "malformed token"


class InvalidSignatureError(AuthenticationError):
    reason = "signature verification failed"


class TokenExpiredError(AuthenticationError):
    reason = "token has expired"


class TokenNotYetValidError(AuthenticationError):
    reason = "token is not yet valid"


class InvalidClaimsError(AuthenticationError):
    """Issuer, audience or a required registered claim is wrong or missing."""

    reason = "invalid token claims"
