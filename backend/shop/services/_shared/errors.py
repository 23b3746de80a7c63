"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never depend on Flask or
HTTP. Every failure a service can report is one member of the closed
:class:`ErrorKind` set, so the transport boundary can match on ``kind``
exhaustively.

The translation to HTTP responses (RFC 7807) is handled by
``shop/core/errors.py`` via ``BaseService.translate_exceptions()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_ID = "invalid_id"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    AUTHENTICATION = "authentication"
    CONFLICT = "conflict"
    STORAGE = "storage"


# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - Subclasses pin :attr:`kind`; callers branch on it instead of on types.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class InvalidIDError(ServiceError):
    """
    Raised when an identifier is not a well-formed UUID.

    :param entity: Entity name (e.g., ``"category"``).
    :param value: The rejected identifier.
    """

    kind = ErrorKind.INVALID_ID

    def __init__(self, entity: str, value: str) -> None:
        self.entity = entity
        self.value = value
        super().__init__("ID is not in its proper form")


class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., ``"product"``).
    :param key: Identifier or search key (id, slug or email).
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, key: str) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ForbiddenError(ServiceError):
    """Raised when the caller's claims do not permit the action."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, action: str = "") -> None:
        self.action = action
        super().__init__("attempted action is not allowed")


class AuthenticationFailure(ServiceError):
    """Raised when email/password authentication fails.

    The message never reveals whether the email exists.
    """

    kind = ErrorKind.AUTHENTICATION

    def __init__(self) -> None:
        super().__init__("authentication failed")


class ConflictError(ServiceError):
    """
    Raised when a unique constraint (slug, email) or a reference is violated.

    :param entity: Entity name.
    :param detail: Short human-readable explanation.
    """

    kind = ErrorKind.CONFLICT

    def __init__(self, entity: str, detail: str) -> None:
        self.entity = entity
        self.detail = detail
        super().__init__(f"Conflict on {entity}: {detail}")


class StorageError(ServiceError):
    """
    Wraps an unexpected storage failure with operation context.

    The original driver exception is chained as ``__cause__``.

    :param operation: ``"<entity>.<op>"`` label, e.g. ``"category.update"``.
    :param arguments: Key arguments of the failing call.
    """

    kind = ErrorKind.STORAGE

    def __init__(self, operation: str, arguments: Mapping[str, Any] | None = None) -> None:
        self.operation = operation
        self.arguments = dict(arguments or {})
        rendered = ", ".join(f"{k}={v!r}" for k, v in self.arguments.items())
        super().__init__(f"{operation} failed" + (f" ({rendered})" if rendered else ""))
