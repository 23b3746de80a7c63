"""Behaviour shared by every catalog entity service."""

from __future__ import annotations

import uuid
from dataclasses import asdict, replace
from datetime import UTC, datetime, timedelta

import pytest

from shop.services import (
    ArticleCategoryService,
    ArticleService,
    BrandService,
    CategoryService,
    ForbiddenError,
    InvalidIDError,
    NotFoundError,
    ProductService,
    SlideService,
    SluggedEntityService,
)
from shop.services.catalog.dto import (
    NewArticle,
    NewArticleCategory,
    NewBrand,
    NewCategory,
    NewProduct,
    NewSlide,
)
from tests.factories.catalog import (
    ArticleCategoryFactory,
    ArticleFactory,
    BrandFactory,
    CategoryFactory,
    ProductFactory,
    SlideFactory,
)

T0 = datetime(2026, 1, 10, 9, 30, tzinfo=UTC)
T1 = T0 + timedelta(hours=3)
TRACE = "test-trace"


def _titled(cls):
    return lambda n: cls(title=f"Title {n}", slug=f"slug-{n}", description=f"About {n}")


ENTITIES = [
    pytest.param(CategoryService, CategoryFactory, _titled(NewCategory), id="category"),
    pytest.param(
        ProductService,
        ProductFactory,
        lambda n: NewProduct(title=f"Product {n}", slug=f"product-{n}", price=10.5 + n),
        id="product",
    ),
    pytest.param(BrandService, BrandFactory, _titled(NewBrand), id="brand"),
    pytest.param(
        ArticleCategoryService,
        ArticleCategoryFactory,
        _titled(NewArticleCategory),
        id="article_category",
    ),
    pytest.param(ArticleService, ArticleFactory, _titled(NewArticle), id="article"),
    pytest.param(
        SlideService,
        SlideFactory,
        lambda n: NewSlide(title=f"Slide {n}", link=f"/promo/{n}", sub_title="Sale"),
        id="slide",
    ),
]


@pytest.mark.parametrize(("service_cls", "row_factory", "make_new"), ENTITIES)
class TestEntityService:
    """Create/read/update/delete rules common to the catalog."""

    @pytest.fixture()
    def service(self, service_cls, session):
        return service_cls()

    # --------------------------- Create ----------------------------------- #

    def test_create_returns_info_stamped_with_now(
        self, service, row_factory, make_new, admin_claims
    ):
        info = service.create(TRACE, admin_claims, make_new(1), T0)

        uuid.UUID(info.id)
        assert info.date_created == info.date_updated == T0
        for key, value in asdict(make_new(1)).items():
            assert getattr(info, key) == value

    def test_created_row_reads_back_identically(
        self, service, row_factory, make_new, admin_claims
    ):
        info = service.create(TRACE, admin_claims, make_new(1), T0)
        assert service.query_by_id(TRACE, info.id) == info

    def test_identifiers_are_fresh(self, service, row_factory, make_new, admin_claims):
        ids = {service.create(TRACE, admin_claims, make_new(n), T0).id for n in range(3)}
        assert len(ids) == 3

    def test_create_requires_admin(self, service, row_factory, make_new, user_claims):
        with pytest.raises(ForbiddenError):
            service.create(TRACE, user_claims, make_new(1), T0)
        assert service.query(TRACE) == []

    # ---------------------------- Read ------------------------------------ #

    def test_query_lists_every_row(self, service, row_factory, make_new):
        rows = row_factory.create_batch(3)
        listed = service.query(TRACE)
        assert sorted(i.id for i in listed) == sorted(r.id for r in rows)

    @pytest.mark.parametrize("bad_id", ["", "42", "not-a-uuid", "5cf37266-3473-4006-984f"])
    def test_query_by_id_rejects_malformed_ids(self, service, row_factory, make_new, bad_id):
        with pytest.raises(InvalidIDError) as excinfo:
            service.query_by_id(TRACE, bad_id)
        assert excinfo.value.message == "ID is not in its proper form"

    def test_query_by_id_unknown(self, service, row_factory, make_new):
        with pytest.raises(NotFoundError):
            service.query_by_id(TRACE, str(uuid.uuid4()))

    # --------------------------- Update ----------------------------------- #

    def test_update_overwrites_present_fields_only(
        self, service, row_factory, make_new, admin_claims
    ):
        created = service.create(TRACE, admin_claims, make_new(1), T0)

        service.update(TRACE, admin_claims, created.id, {"title": "Updated"}, T1)

        after = service.query_by_id(TRACE, created.id)
        assert after == replace(created, title="Updated", date_updated=T1)

    def test_update_with_earlier_clock_keeps_date_updated_at_creation(
        self, service, row_factory, make_new, admin_claims
    ):
        created = service.create(TRACE, admin_claims, make_new(1), T1)

        service.update(TRACE, admin_claims, created.id, {"title": "Updated"}, T0)

        after = service.query_by_id(TRACE, created.id)
        assert after.date_updated == after.date_created == T1

    def test_update_unknown_id_reports_not_found_before_role(
        self, service, row_factory, make_new, user_claims
    ):
        with pytest.raises(NotFoundError):
            service.update(TRACE, user_claims, str(uuid.uuid4()), {"title": "x"}, T1)

    def test_update_requires_admin_and_keeps_row(
        self, service, row_factory, make_new, admin_claims, user_claims
    ):
        created = service.create(TRACE, admin_claims, make_new(1), T0)
        with pytest.raises(ForbiddenError):
            service.update(TRACE, user_claims, created.id, {"title": "Hacked"}, T1)
        assert service.query_by_id(TRACE, created.id) == created

    def test_update_rejects_malformed_id(self, service, row_factory, make_new, admin_claims):
        with pytest.raises(InvalidIDError):
            service.update(TRACE, admin_claims, "nope", {"title": "x"}, T1)

    def test_update_rejects_unknown_fields(self, service, row_factory, make_new, admin_claims):
        created = service.create(TRACE, admin_claims, make_new(1), T0)
        with pytest.raises(ValueError):
            service.update(TRACE, admin_claims, created.id, {"date_created": T1}, T1)

    # --------------------------- Delete ----------------------------------- #

    def test_delete_then_not_found(self, service, row_factory, make_new, admin_claims):
        created = service.create(TRACE, admin_claims, make_new(1), T0)
        service.delete(TRACE, admin_claims, created.id)
        with pytest.raises(NotFoundError):
            service.query_by_id(TRACE, created.id)

    def test_delete_missing_id_succeeds(self, service, row_factory, make_new, admin_claims):
        service.delete(TRACE, admin_claims, str(uuid.uuid4()))

    def test_delete_checks_role_before_id_format(
        self, service, row_factory, make_new, user_claims
    ):
        with pytest.raises(ForbiddenError):
            service.delete(TRACE, user_claims, "not-a-uuid")

    def test_delete_rejects_malformed_id_for_admin(
        self, service, row_factory, make_new, admin_claims
    ):
        with pytest.raises(InvalidIDError):
            service.delete(TRACE, admin_claims, "not-a-uuid")

    def test_delete_requires_admin_and_keeps_row(
        self, service, row_factory, make_new, user_claims
    ):
        row = row_factory()
        with pytest.raises(ForbiddenError):
            service.delete(TRACE, user_claims, row.id)
        assert service.query_by_id(TRACE, row.id).id == row.id

    # --------------------------- Logging ---------------------------------- #

    def test_operations_are_logged_with_trace_id(
        self, service, row_factory, make_new, caplog
    ):
        caplog.set_level("INFO", logger="shop.services")
        service.query(TRACE)
        record = next(r for r in caplog.records if r.name == "shop.services")
        assert record.getMessage() == f"{TRACE}: {service.entity}.query"
        assert record.trace_id == TRACE

    def test_operation_arguments_travel_with_the_record(
        self, service, row_factory, make_new, caplog
    ):
        row = row_factory()
        caplog.set_level("INFO", logger="shop.services")

        service.query_by_id(TRACE, row.id)

        record = next(r for r in caplog.records if r.name == "shop.services")
        assert record.operation == f"{service.entity}.query_by_id"
        assert record.arguments == {"id": row.id}


SLUGGED = [p for p in ENTITIES if p.id != "slide"]


@pytest.mark.parametrize(("service_cls", "row_factory", "make_new"), SLUGGED)
class TestSlugLookup:
    @pytest.fixture()
    def service(self, service_cls, session):
        return service_cls()

    def test_query_by_slug(self, service, row_factory, make_new):
        row = row_factory(slug="the-slug")
        assert service.query_by_slug(TRACE, "the-slug").id == row.id

    def test_query_by_slug_unknown(self, service, row_factory, make_new):
        with pytest.raises(NotFoundError):
            service.query_by_slug(TRACE, "missing")

    def test_duplicate_slug_conflicts(self, service, row_factory, make_new, admin_claims):
        from shop.services import ConflictError

        service.create(TRACE, admin_claims, make_new(1), T0)
        with pytest.raises(ConflictError):
            service.create(TRACE, admin_claims, make_new(1), T0)


def test_slides_have_no_slug_lookup():
    assert not issubclass(SlideService, SluggedEntityService)
    assert not hasattr(SlideService(), "query_by_slug")
