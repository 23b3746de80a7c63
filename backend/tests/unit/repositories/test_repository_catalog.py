from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from shop.repositories import BrandRepository, ProductRepository, SlideRepository
from tests.factories.catalog import BrandFactory, ProductFactory, SlideFactory


class TestProductRepository:
    @pytest.fixture()
    def repo(self, session) -> ProductRepository:
        return ProductRepository(session=session)

    def test_insert_maps_id_to_entity_column(self, repo, session):
        now = datetime.now(UTC)
        pid = str(uuid.uuid4())
        repo.insert(
            {"id": pid, "title": "Lamp", "slug": "lamp", "date_created": now, "date_updated": now}
        )

        row = repo.get(pid)
        assert row is not None
        assert row.title == "Lamp"
        assert row.price == 0.0
        assert row.description == ""

    def test_update_reports_rowcount_and_refreshes_reads(self, repo):
        product = ProductFactory(title="Before")

        assert repo.update(product.id, {"title": "After"}) == 1
        assert repo.update(str(uuid.uuid4()), {"title": "Nope"}) == 0
        # Identity map must not serve the stale ``Before`` value
        assert repo.get(product.id).title == "After"

    def test_delete_is_idempotent(self, repo):
        product = ProductFactory()
        assert repo.delete(product.id) == 1
        assert repo.delete(product.id) == 0
        assert repo.get(product.id) is None

    def test_list_orders_by_creation_then_id(self, repo):
        base = datetime(2026, 1, 1, tzinfo=UTC)
        late = ProductFactory(date_created=base + timedelta(days=2))
        early = ProductFactory(date_created=base)
        assert [p.id for p in repo.list()] == [early.id, late.id]

    def test_get_by_slug(self, repo):
        product = ProductFactory(slug="walnut-desk")
        assert repo.get_by_slug("walnut-desk").id == product.id
        assert repo.get_by_slug("missing") is None

    def test_brand_delete_nulls_product_reference(self, repo, session):
        brand = BrandFactory()
        product = ProductFactory(brand_id=brand.id)

        BrandRepository(session=session).delete(brand.id)
        assert repo.get(product.id).brand_id is None


class TestSlideRepository:
    def test_slides_have_no_slug(self, session):
        SlideFactory()
        with pytest.raises(RuntimeError):
            SlideRepository(session=session).get_by_slug("anything")
