"""
User account service: account management and password authentication.

Authorization differs from the catalog only on reads: a user may read their
own account while admins may read any. Listing, creating, updating and
deleting accounts are admin only.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash

from shop.auth.claims import Claims
from shop.models.user import hash_password, normalize_email
from shop.services._shared.base import BaseService, as_utc, new_id, updated_at
from shop.services._shared.dto import from_row
from shop.services._shared.errors import (
    AuthenticationFailure,
    ConflictError,
    NotFoundError,
    StorageError,
)
from shop.services.users.dto import NewUser, UpdateUser, UserInfo

log = logging.getLogger(__name__)

ENTITY = "user"
UPDATABLE_FIELDS = frozenset({"name", "email", "roles", "password"})

DEFAULT_ISSUER = "shop backend"
DEFAULT_AUDIENCE = "shop"
DEFAULT_TOKEN_TTL = 3600

# Checked against on unknown emails so both failure paths hash once
_UNKNOWN_USER_HASH = hash_password("unknown-user")


class UserService(BaseService):
    """
    Manage user accounts.

    :param issuer: ``iss`` stamped into claims returned by :meth:`authenticate`.
    :param audience: ``aud`` stamped into those claims.
    :param token_ttl: Claim lifetime in seconds.
    """

    def __init__(
        self,
        *,
        issuer: str = DEFAULT_ISSUER,
        audience: str = DEFAULT_AUDIENCE,
        token_ttl: int = DEFAULT_TOKEN_TTL,
    ) -> None:
        self.issuer = issuer
        self.audience = audience
        self.token_ttl = int(token_ttl)

    # ------------------------------- Helpers -------------------------------

    def _write(self, operation: str, arguments: dict[str, Any], fn) -> None:
        try:
            with self.rw_uow() as uow:
                fn(uow.users)
        except IntegrityError as exc:
            raise ConflictError(ENTITY, "email already in use") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"{ENTITY}.{operation}", arguments) from exc

    # -------------------------------- Reads --------------------------------

    def query(self, trace_id: str, page: int, rows_per_page: int) -> list[UserInfo]:
        """
        Return one page of users ordered by creation time.

        :param page: 1-based page number; values below 1 are clamped.
        :param rows_per_page: Page size; values below 1 are clamped.
        :raises StorageError: On storage failure.
        """
        page = max(1, int(page))
        rows_per_page = max(1, int(rows_per_page))
        self.log_operation(trace_id, ENTITY, "query", page=page, rows_per_page=rows_per_page)
        try:
            with self.ro_uow() as uow:
                return [from_row(UserInfo, u) for u in uow.users.page(page, rows_per_page)]
        except SQLAlchemyError as exc:
            raise StorageError(f"{ENTITY}.query", {"page": page}) from exc

    def query_by_id(self, trace_id: str, claims: Claims, user_id: str) -> UserInfo:
        """
        Return a user the caller may see.

        :raises InvalidIDError: When ``user_id`` is not a UUID.
        :raises ForbiddenError: When the caller is neither admin nor the user.
        :raises NotFoundError: When no such user exists.
        """
        self.ensure_valid_id(ENTITY, user_id)
        self.ensure_owner(claims, user_id, f"{ENTITY}.query_by_id")

        self.log_operation(trace_id, ENTITY, "query_by_id", id=user_id)
        try:
            with self.ro_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError(ENTITY, user_id)
                return from_row(UserInfo, user)
        except SQLAlchemyError as exc:
            raise StorageError(f"{ENTITY}.query_by_id", {"id": user_id}) from exc

    def query_by_email(self, trace_id: str, claims: Claims, email: str) -> UserInfo:
        """
        Look a user up by email, then apply the ownership check to the match.

        :raises NotFoundError: When no user has that email.
        :raises ForbiddenError: When the caller may not see the match.
        """
        self.log_operation(trace_id, ENTITY, "query_by_email", email=email)
        try:
            with self.ro_uow() as uow:
                user = uow.users.get_by_email(email)
                if user is None:
                    raise NotFoundError(ENTITY, email)
                info = from_row(UserInfo, user)
        except SQLAlchemyError as exc:
            raise StorageError(f"{ENTITY}.query_by_email", {"email": email}) from exc

        self.ensure_owner(claims, info.id, f"{ENTITY}.query_by_email")
        return info

    # -------------------------------- Writes -------------------------------

    def create(self, trace_id: str, claims: Claims, new: NewUser, now: datetime) -> UserInfo:
        """
        Create an account. Admin only.

        :raises ForbiddenError: When the caller is not an admin.
        :raises ConflictError: When the email is already registered.
        """
        self.ensure_admin(claims, f"{ENTITY}.create")

        now = as_utc(now)
        info = UserInfo(
            id=new_id(),
            name=new.name,
            email=normalize_email(new.email),
            roles=list(new.roles),
            date_created=now,
            date_updated=now,
        )
        values = {
            "id": info.id,
            "name": info.name,
            "email": info.email,
            "roles": info.roles,
            "password_hash": hash_password(new.password),
            "date_created": now,
            "date_updated": now,
        }

        self.log_operation(trace_id, ENTITY, "create", id=info.id, email=info.email)
        self._write("create", {"id": info.id}, lambda users: users.insert(values))
        return info

    def update(
        self,
        trace_id: str,
        claims: Claims,
        user_id: str,
        update: UpdateUser,
        now: datetime,
    ) -> None:
        """
        Patch any account. Admin only; a new ``password`` is re-hashed.

        :raises ForbiddenError: When the caller is not an admin (checked first).
        :raises InvalidIDError: When ``user_id`` is not a UUID.
        :raises NotFoundError: When no such user exists.
        :raises ValueError: When ``update`` carries non-updatable keys.
        """
        self.ensure_admin(claims, f"{ENTITY}.update")
        current = self.query_by_id(trace_id, claims, user_id)

        unknown = sorted(set(update) - UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")

        values: dict[str, Any] = {
            "name": update.get("name", current.name),
            "email": normalize_email(update.get("email", current.email)),
            "roles": list(update.get("roles", current.roles)),
            "date_updated": updated_at(now, current.date_created),
        }
        if update.get("password"):
            values["password_hash"] = hash_password(update["password"])

        self.log_operation(
            trace_id,
            ENTITY,
            "update",
            id=user_id,
            fields=sorted(update),
        )
        self._write("update", {"id": user_id}, lambda users: users.update(user_id, values))

    def delete(self, trace_id: str, claims: Claims, user_id: str) -> None:
        """
        Delete any account. Admin only; missing ids succeed.

        :raises ForbiddenError: When the caller is not an admin (checked first).
        :raises InvalidIDError: When ``user_id`` is not a UUID.
        """
        self.ensure_admin(claims, f"{ENTITY}.delete")
        self.ensure_valid_id(ENTITY, user_id)

        self.log_operation(trace_id, ENTITY, "delete", id=user_id)
        self._write("delete", {"id": user_id}, lambda users: users.delete(user_id))

    # ---------------------------- Authentication ---------------------------

    def authenticate(self, trace_id: str, now: datetime, email: str, password: str) -> Claims:
        """
        Check an email/password pair and return claims for the user.

        Unknown emails and wrong passwords fail identically.

        :raises AuthenticationFailure: On any credential mismatch.
        :raises StorageError: On storage failure.
        """
        self.log_operation(trace_id, ENTITY, "authenticate", email=email)
        try:
            with self.ro_uow() as uow:
                user = uow.users.get_by_email(email)
                if user is None:
                    check_password_hash(_UNKNOWN_USER_HASH, password)
                    raise AuthenticationFailure()
                if not user.verify_password(password):
                    raise AuthenticationFailure()
                subject, roles = user.id, list(user.roles or [])
        except SQLAlchemyError as exc:
            raise StorageError(f"{ENTITY}.authenticate", {"email": email}) from exc

        now = as_utc(now)
        return Claims.build(
            subject=subject,
            roles=roles,
            issuer=self.issuer,
            audience=self.audience,
            issued_at=now,
            expires_at=now + timedelta(seconds=self.token_ttl),
        )
