# shop/services/_shared/base.py
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import Any, assert_never

from shop.auth.claims import Claims, Role
from shop.core import errors as api_errors
from shop.services._shared.errors import (
    ErrorKind,
    ForbiddenError,
    InvalidIDError,
    ServiceError,
)
from shop.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

log = logging.getLogger("shop.services")


def is_valid_uuid(value: Any) -> bool:
    """Return ``True`` when ``value`` parses as a UUID string."""
    if not isinstance(value, str):
        return False
    try:
        uuid.UUID(value)
    except ValueError:
        return False
    return True


def new_id() -> str:
    """Return a fresh random (version 4) UUID string."""
    return str(uuid.uuid4())


def as_utc(now: datetime) -> datetime:
    """Normalise ``now`` to an aware UTC datetime (naive values are taken as UTC)."""
    if now.tzinfo is None:
        return now.replace(tzinfo=UTC)
    return now.astimezone(UTC)


def updated_at(now: datetime, created: datetime) -> datetime:
    """Return ``now`` in UTC, never earlier than ``created``."""
    return max(as_utc(now), as_utc(created))


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Centralize error translation and operation logging.
    * Offer shared authorization and identifier checks.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Claims and the request trace id are passed explicitly to each call.
    """

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param enforce_db_readonly: Apply ``SET TRANSACTION READ ONLY`` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    # ------------------------------ Logging ---------------------------------

    def log_operation(self, trace_id: str, entity: str, operation: str, **args: Any) -> None:
        """Emit the ``"<trace_id>: <entity>.<operation>"`` line for a call."""
        label = f"{entity}.{operation}"
        log.info(
            "%s: %s",
            trace_id,
            label,
            extra={"trace_id": trace_id, "entity": entity, "operation": label, "arguments": args},
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_valid_id(self, entity: str, value: str) -> None:
        """
        Reject identifiers that are not UUIDs, before any storage access.

        :raises InvalidIDError: When ``value`` does not parse.
        """
        if not is_valid_uuid(value):
            raise InvalidIDError(entity, value)

    # --------------------------- AuthZ --------------------------------

    def ensure_admin(self, claims: Claims, action: str) -> None:
        """
        Require the ``ADMIN`` role.

        :raises ForbiddenError: When the caller is not an admin.
        """
        if not claims.authorized(Role.ADMIN):
            raise ForbiddenError(action)

    def ensure_owner(self, claims: Claims, resource_id: str, action: str) -> None:
        """
        Require the caller to be an admin or the owner of ``resource_id``.

        :raises ForbiddenError: When neither holds.
        """
        if not claims.can_access(resource_id):
            raise ForbiddenError(action)

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated exception ready to be re-raised; anything that is
            not a :class:`ServiceError` is returned untouched.
        :rtype: Exception
        """
        if not isinstance(exc, ServiceError):
            # Fallback: will bubble up to the Flask handlers
            return exc

        kind = exc.kind
        if kind is ErrorKind.INVALID_ID:
            return api_errors.BadRequest(exc.message, code="invalid_id")
        if kind is ErrorKind.NOT_FOUND:
            return api_errors.NotFound(exc.message)
        if kind is ErrorKind.FORBIDDEN:
            return api_errors.Forbidden(exc.message)
        if kind is ErrorKind.AUTHENTICATION:
            return api_errors.Unauthorized(exc.message)
        if kind is ErrorKind.CONFLICT:
            return api_errors.Conflict(exc.message)
        if kind is ErrorKind.STORAGE:
            # Never leak statements or driver messages to clients
            return api_errors.APIError(
                message="Unexpected storage failure",
                status_code=500,
                code="storage_error",
            )
        assert_never(kind)
