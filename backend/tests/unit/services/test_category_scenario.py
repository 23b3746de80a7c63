from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from shop.services import CategoryService, NotFoundError
from shop.services.catalog.dto import NewCategory

T0 = datetime(2026, 2, 4, tzinfo=UTC)
T1 = T0 + timedelta(days=1)


def test_category_lifecycle(session, admin_claims):
    """Create, rename, look up by the unchanged slug, then delete."""
    service = CategoryService()

    created = service.create(
        "trace", admin_claims, NewCategory(title="First category", slug="first-category"), T0
    )
    assert created.date_created == created.date_updated == T0

    service.update("trace", admin_claims, created.id, {"title": "Updated"}, T1)

    by_slug = service.query_by_slug("trace", "first-category")
    assert by_slug.id == created.id
    assert by_slug.title == "Updated"
    assert by_slug.slug == "first-category"
    assert by_slug.date_created == T0
    assert by_slug.date_updated == T1

    service.delete("trace", admin_claims, created.id)
    with pytest.raises(NotFoundError):
        service.query_by_id("trace", created.id)


def test_deleting_parent_orphans_children(session, admin_claims):
    service = CategoryService()
    parent = service.create("t", admin_claims, NewCategory(title="Parent", slug="parent"), T0)
    child = service.create(
        "t", admin_claims, NewCategory(title="Child", slug="child", parent_id=parent.id), T0
    )

    service.delete("t", admin_claims, parent.id)

    assert service.query_by_id("t", child.id).parent_id is None


def test_update_can_clear_parent(session, admin_claims):
    service = CategoryService()
    parent = service.create("t", admin_claims, NewCategory(title="Parent", slug="parent"), T0)
    child = service.create(
        "t", admin_claims, NewCategory(title="Child", slug="child", parent_id=parent.id), T0
    )

    service.update("t", admin_claims, child.id, {"parent_id": None}, T1)

    assert service.query_by_id("t", child.id).parent_id is None


def test_categories_are_listed_by_title(session, admin_claims):
    service = CategoryService()
    for title in ("Shoes", "Bags", "Hats"):
        service.create("t", admin_claims, NewCategory(title=title, slug=title.lower()), T0)

    assert [c.title for c in service.query("t")] == ["Bags", "Hats", "Shoes"]


def test_product_prices_are_rounded(session, admin_claims):
    from shop.services import ProductService
    from shop.services.catalog.dto import NewProduct

    service = ProductService()
    created = service.create(
        "t", admin_claims, NewProduct(title="Lamp", slug="lamp", price=3535.234), T0
    )
    assert created.price == 3535.23

    service.update("t", admin_claims, created.id, {"old_price": 4000.005}, T1)
    assert service.query_by_id("t", created.id).old_price == pytest.approx(4000.0, abs=0.011)
