"""Bearer token authentication: claims, signing keys, verifier and issuer."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

from shop.auth.claims import Claims, Role
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
from shop.auth.manager import (
    EXTENSION_KEY,
    get_issuer,
    get_key_store,
    get_verifier,
    verify_request,
)
from shop.auth.tokens import TokenIssuer, TokenVerifier

log = logging.getLogger(__name__)


def init_app(app: Flask, key_store: KeyStore | None = None) -> None:
    """
    Build the key store, verifier and issuer and attach them to ``app``.

    ``key_store`` overrides loading from ``AUTH_KEYS_FOLDER``; tests use it to
    inject generated keys. A missing folder leaves the store empty so every
    token is rejected with :class:`UnknownKeyError`. The ``AUTH_*`` algorithm,
    issuer and audience are copied into the ``JWT_*`` keys the JWT manager
    signs and decodes with.
    """
    if key_store is None:
        folder = app.config.get("AUTH_KEYS_FOLDER") or ""
        if folder and Path(folder).is_dir():
            key_store = KeyStore.from_folder(folder)
        else:
            if folder:
                log.warning("AUTH_KEYS_FOLDER %s does not exist; no signing keys loaded", folder)
            key_store = KeyStore()

    algorithm = app.config.get("AUTH_ALGORITHM", "RS256")
    audience = app.config.get("AUTH_AUDIENCE") or None
    issuer = app.config.get("AUTH_ISSUER") or None
    app.config.update(
        JWT_ALGORITHM=algorithm,
        JWT_DECODE_ALGORITHMS=[algorithm],
        JWT_DECODE_AUDIENCE=audience,
        JWT_DECODE_ISSUER=issuer,
    )

    app.extensions[EXTENSION_KEY] = {
        "keys": key_store,
        "verifier": TokenVerifier(
            key_store.public_key, algorithm, audience=audience, issuer=issuer
        ),
        "issuer": TokenIssuer(key_store),
    }


__all__ = [
    "AuthenticationError",
    "Claims",
    "InvalidClaimsError",
    "InvalidSignatureError",
    "KeyStore",
    "MalformedTokenError",
    "Role",
    "TokenExpiredError",
    "TokenIssuer",
    "TokenNotYetValidError",
    "TokenVerifier",
    "UnknownKeyError",
    "get_issuer",
    "get_key_store",
    "get_verifier",
    "init_app",
    "verify_request",
]
