"""Signed bearer token verification and issuance (RS256 with ``kid`` lookup)."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from flask_jwt_extended import create_access_token
from jwt import exceptions as jwt_errors

from shop.auth.claims import Claims
from shop.auth.errors import (
    AuthenticationError,
    InvalidClaimsError,
    InvalidSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    TokenNotYetValidError,
    UnknownKeyError,
)
from shop.auth.keys import KeyStore

log = logging.getLogger(__name__)

KeyLookup = Callable[[str], Any]

REQUIRED_CLAIMS = ("exp", "iat", "sub")


def from_jwt_error(exc: jwt_errors.InvalidTokenError) -> AuthenticationError:
    """Return the :class:`AuthenticationError` matching a PyJWT decode failure."""
    if isinstance(exc, jwt_errors.InvalidSignatureError):
        return InvalidSignatureError()
    if isinstance(exc, jwt_errors.ExpiredSignatureError):
        return TokenExpiredError()
    if isinstance(exc, jwt_errors.ImmatureSignatureError):
        return TokenNotYetValidError()
    if isinstance(
        exc,
        jwt_errors.InvalidAudienceError
        | jwt_errors.InvalidIssuerError
        | jwt_errors.MissingRequiredClaimError
        | jwt_errors.InvalidIssuedAtError,
    ):
        return InvalidClaimsError(str(exc))
    return MalformedTokenError(str(exc))


class TokenVerifier:
    """
    Verify compact JWS tokens and map their payload to :class:`Claims`.

    Requests are decoded by flask-jwt-extended, which hands the payload to
    :meth:`claims_from` and resolves keys through :meth:`key_for`;
    :meth:`verify` does the whole job for a raw token outside a request.

    Parameters
    ----------
    key_lookup : Callable[[str], Any]
        Resolves a ``kid`` into a public key; raises
        :class:`~shop.auth.errors.UnknownKeyError` (or ``KeyError``) when the
        identifier is unknown.
    algorithm : str
        The only accepted signing algorithm.
    audience, issuer : str | None
        When set, tokens must carry exactly these ``aud``/``iss`` values.
    leeway : int
        Clock skew tolerance in seconds for time-based claims.
    """

    def __init__(
        self,
        key_lookup: KeyLookup,
        algorithm: str = "RS256",
        *,
        audience: str | None = None,
        issuer: str | None = None,
        leeway: int = 0,
    ) -> None:
        self.key_lookup = key_lookup
        self.algorithm = algorithm
        self.audience = audience
        self.issuer = issuer
        self.leeway = leeway

    def key_for(self, kid: Any) -> Any:
        """
        Return the public key registered under ``kid``.

        :raises MalformedTokenError: When ``kid`` is missing or not a string.
        :raises UnknownKeyError: When no key is registered under it.
        """
        if not kid or not isinstance(kid, str):
            raise MalformedTokenError("token header is missing 'kid'")
        try:
            return self.key_lookup(kid)
        except UnknownKeyError:
            raise
        except KeyError as exc:
            raise UnknownKeyError(kid) from exc

    def claims_from(self, payload: Mapping[str, Any]) -> Claims:
        """
        Map a decoded, signature-checked payload to claims.

        :raises InvalidClaimsError: When a required claim is missing or malformed.
        :raises TokenNotYetValidError: When ``iat`` lies in the future.
        """
        missing = [name for name in REQUIRED_CLAIMS if name not in payload]
        if missing:
            raise InvalidClaimsError(f"token is missing claims: {missing}")
        try:
            claims = Claims.from_payload(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidClaimsError(str(exc)) from exc

        now = datetime.now(UTC)
        if claims.issued_at > now + timedelta(seconds=self.leeway):
            raise TokenNotYetValidError()
        return claims

    def verify(self, token: str) -> Claims:
        """
        Verify ``token`` and return its claims.

        :param token: Compact serialized JWT (no ``Bearer`` prefix).
        :returns: Parsed claims.
        :raises AuthenticationError: One of its subclasses describing the cause.
        """
        if not token or not isinstance(token, str):
            raise MalformedTokenError("empty token")

        try:
            header = jwt.get_unverified_header(token)
        except jwt_errors.InvalidTokenError as exc:
            raise MalformedTokenError(f"token header unreadable: {exc}") from exc

        key = self.key_for(header.get("kid"))
        try:
            payload = jwt.decode(
                token,
                key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway,
                options={
                    "require": list(REQUIRED_CLAIMS),
                    "verify_aud": self.audience is not None,
                },
            )
        except jwt_errors.InvalidTokenError as exc:
            raise from_jwt_error(exc) from exc
        return self.claims_from(payload)


@dataclass(frozen=True, slots=True)
class SigningRequest:
    """Identity handed to ``create_access_token``: the claims, their ``kid`` and its key."""

    kid: str
    key: Any
    claims: Claims


class TokenIssuer:
    """Sign claims with the private key registered under a ``kid``.

    Tokens are minted by flask-jwt-extended, so an application context is
    required; the JWT manager's loaders read everything from the
    :class:`SigningRequest`.
    """

    def __init__(self, key_store: KeyStore) -> None:
        self.key_store = key_store

    def generate(self, kid: str, claims: Claims) -> str:
        """
        Produce a signed token carrying ``claims``.

        :param kid: Key identifier stamped into the token header.
        :param claims: Claims to embed.
        :returns: Compact serialized JWT.
        :raises UnknownKeyError: When ``kid`` is not in the key store.
        """
        key = self.key_store.private_key(kid)
        token = create_access_token(
            identity=SigningRequest(kid=kid, key=key, claims=claims),
            additional_headers={"kid": kid},
            expires_delta=False,
        )
        log.debug("Issued token kid=%s sub=%s", kid, claims.subject)
        return token


__all__ = [
    "AuthenticationError",
    "KeyLookup",
    "SigningRequest",
    "TokenIssuer",
    "TokenVerifier",
    "from_jwt_error",
]
