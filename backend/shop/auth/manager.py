"""flask-jwt-extended wiring: ``kid``-aware key loaders and request verification."""

from __future__ import annotations

from typing import Any

from flask import current_app
from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import exceptions as jwt_errors

from shop.auth.claims import Claims
from shop.auth.errors import MalformedTokenError
from shop.auth.keys import KeyStore
from shop.auth.tokens import SigningRequest, TokenIssuer, TokenVerifier, from_jwt_error
from shop.core.extensions import jwt as jwt_manager

EXTENSION_KEY = "shop.auth"


def get_key_store() -> KeyStore:
    return current_app.extensions[EXTENSION_KEY]["keys"]


def get_verifier() -> TokenVerifier:
    return current_app.extensions[EXTENSION_KEY]["verifier"]


def get_issuer() -> TokenIssuer:
    return current_app.extensions[EXTENSION_KEY]["issuer"]


# -- Signing --------------------------------------------------------------------


@jwt_manager.user_identity_loader
def _subject(identity: SigningRequest) -> str:
    return identity.claims.subject


@jwt_manager.additional_claims_loader
def _claims(identity: SigningRequest) -> dict[str, Any]:
    return identity.claims.to_payload()


@jwt_manager.encode_key_loader
def _private_key(identity: SigningRequest) -> Any:
    return identity.key


# -- Verification ---------------------------------------------------------------


@jwt_manager.decode_key_loader
def _public_key(jwt_header: dict[str, Any], jwt_data: dict[str, Any]) -> Any:
    return get_verifier().key_for(jwt_header.get("kid"))


def verify_request() -> Claims:
    """
    Verify the bearer token of the current request and return its claims.

    :raises AuthenticationError: One of its subclasses describing the cause.
    """
    try:
        verify_jwt_in_request()
    except JWTExtendedException as exc:
        # Missing header, wrong scheme or a payload without ``sub``
        raise MalformedTokenError(str(exc)) from exc
    except jwt_errors.InvalidTokenError as exc:
        raise from_jwt_error(exc) from exc
    return get_verifier().claims_from(get_jwt())


__all__ = [
    "EXTENSION_KEY",
    "get_issuer",
    "get_key_store",
    "get_verifier",
    "verify_request",
]
