"""Idempotent database seed helpers for local development environments."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, TypeVar, cast

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import select
from sqlalchemy.orm import Session

from shop.auth.claims import Role
from shop.models import Brand, Category, Product, User

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

# Password shared by the development accounts
SEED_PASSWORD = "gophers"

USER_FIXTURES: list[dict[str, Any]] = [
    {
        "id": "5cf37266-3473-4006-984f-9325122678b7",
        "name": "Admin Gopher",
        "email": "admin@example.com",
        "roles": [Role.ADMIN.value, Role.USER.value],
    },
    {
        "id": "45b5fbd3-755f-4379-8f07-a58d4a30fa2f",
        "name": "User Gopher",
        "email": "user@example.com",
        "roles": [Role.USER.value],
    },
]

CATEGORY_FIXTURES: list[dict[str, Any]] = [
    {
        "id": "00000000-0000-0000-0000-000000000000",
        "title": "First category",
        "slug": "first-category",
        "image": "link-to-image",
    },
]

BRAND_FIXTURES: list[dict[str, Any]] = [
    {
        "id": "84fc7ad7-0f6c-4938-9cec-bb8f55953709",
        "title": "Brand Title",
        "slug": "brand-title",
        "image": "link-to-image",
        "description": "description text",
    },
]

PRODUCT_FIXTURES: list[dict[str, Any]] = [
    {
        "id": "9097a8f9-c7c0-4e88-81da-72ec34a1dc79",
        "title": "Product Title",
        "slug": "product-title",
        "category_id": "00000000-0000-0000-0000-000000000000",
        "brand_id": "84fc7ad7-0f6c-4938-9cec-bb8f55953709",
        "price": 3535.23,
        "image": "link-to-image",
        "description": "description text",
    },
]


def _session(database: SQLAlchemy) -> Session:
    """Return the current SQLAlchemy session."""
    return cast(Session, database.session)


def _touch(summary: dict[str, dict[str, int]], table: str, created: bool) -> None:
    """Update summary counters for the given table."""
    entry = summary.setdefault(table, {"created": 0, "existing": 0})
    if created:
        entry["created"] += 1
    else:
        entry["existing"] += 1


def _get_or_create(
    session: Session,
    model: type[T],
    *,
    defaults: dict[str, Any] | None = None,
    **filters: Any,
) -> tuple[T, bool]:
    """Fetch ``model`` by ``filters`` or create it using ``defaults``."""
    instance = session.execute(select(model).filter_by(**filters)).scalar_one_or_none()
    if instance is not None:
        return instance, False
    params = dict(defaults or {})
    params.update(filters)
    instance = cast(T, model(**params))
    session.add(instance)
    return instance, True


def seed_users(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create the admin and regular development accounts."""
    if verbose:
        LOGGER.info("Seeding users...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    now = datetime.now(UTC)

    for fixture in USER_FIXTURES:
        user = session.get(User, fixture["id"])
        created = user is None
        if user is None:
            user = User(
                id=fixture["id"],
                name=fixture["name"],
                email=fixture["email"],
                roles=list(fixture["roles"]),
                date_created=now,
                date_updated=now,
            )
            user.password = SEED_PASSWORD
            session.add(user)
        _touch(summary, "users", created)

    session.commit()
    return summary


def seed_catalog(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Create one category, one brand and one product referencing both."""
    if verbose:
        LOGGER.info("Seeding catalog...")
    session = _session(database)
    summary: dict[str, dict[str, int]] = {}
    now = datetime.now(UTC)
    stamps = {"date_created": now, "date_updated": now}

    for table, model, fixtures in (
        ("categories", Category, CATEGORY_FIXTURES),
        ("brands", Brand, BRAND_FIXTURES),
        ("products", Product, PRODUCT_FIXTURES),
    ):
        for fixture in fixtures:
            defaults = {k: v for k, v in fixture.items() if k != "id"} | stamps
            _, created = _get_or_create(session, model, defaults=defaults, id=fixture["id"])
            _touch(summary, table, created)
        # Products reference the rows above
        session.flush()

    session.commit()
    return summary


def run_all(database: SQLAlchemy, *, verbose: bool = False) -> dict[str, dict[str, int]]:
    """Run all seeders in the correct foreign-key order."""
    if verbose:
        LOGGER.info("Running full seed pipeline...")
    combined: dict[str, dict[str, int]] = {}
    for func in (seed_users, seed_catalog):
        result = func(database, verbose=verbose)
        for table, counters in result.items():
            entry = combined.setdefault(table, {"created": 0, "existing": 0})
            entry["created"] += counters.get("created", 0)
            entry["existing"] += counters.get("existing", 0)
    return combined


__all__ = ["seed_catalog", "seed_users", "run_all"]
