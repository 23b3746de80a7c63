"""
Catalog services: one generic CRUD workflow configured per entity.

Every catalog entity (categories, products, brands, article categories,
articles and slides) follows the same rules:

* reads are public; ``query_by_id`` rejects malformed identifiers before
  touching storage,
* writes require the ``ADMIN`` role and are a single statement each,
* ``update`` loads the row first, so a missing row wins over a missing role,
  while ``delete`` checks the role first and is unconditional.

Subclasses only describe *what* differs: entity name, repository attribute
on the unit of work, command/read types and default values.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shop.auth.claims import Claims
from shop.services._shared.base import BaseService, as_utc, new_id, updated_at
from shop.services._shared.dto import field_names, from_row, to_values
from shop.services._shared.errors import ConflictError, NotFoundError, StorageError
from shop.services.catalog.dto import (
    ArticleCategoryInfo,
    ArticleInfo,
    BrandInfo,
    CategoryInfo,
    NewArticle,
    NewArticleCategory,
    NewBrand,
    NewCategory,
    NewProduct,
    NewSlide,
    ProductInfo,
    SlideInfo,
    Update,
)
from shop.uow.base import UnitOfWork

InfoT = TypeVar("InfoT")  # read model (``<Entity>Info``)
NewT = TypeVar("NewT")  # create command (``New<Entity>``)

# Fields managed by the service, never by the caller
_SYSTEM_FIELDS = frozenset({"id", "date_created", "date_updated"})


class EntityService(BaseService, Generic[NewT, InfoT]):
    """
    CRUD over one catalog table.

    Class attributes
    ----------------
    entity : str
        Lowercase name used in log lines and errors (``"category"``).
    repository : str
        Attribute of the unit of work holding the repository.
    new_type, info_type : type
        Create command and read model dataclasses.
    """

    entity: ClassVar[str]
    repository: ClassVar[str]
    new_type: ClassVar[type[Any]]
    info_type: ClassVar[type[Any]]

    @classmethod
    def writable(cls) -> frozenset[str]:
        """Fields a caller may set on create or patch on update."""
        return frozenset(field_names(cls.new_type))

    # ------------------------------ Internals -------------------------------

    def _repo(self, uow: UnitOfWork) -> Any:
        return uow.repository(self.repository)

    def normalize(self, values: dict[str, Any]) -> dict[str, Any]:
        """Hook to canonicalise (possibly partial) writable values before storage."""
        return values

    def _write(self, operation: str, arguments: Mapping[str, Any], fn) -> None:
        """Run ``fn(repo)`` in a read-write unit of work with error classification."""
        try:
            with self.rw_uow() as uow:
                fn(self._repo(uow))
        except IntegrityError as exc:
            raise ConflictError(self.entity, "unique or reference constraint violated") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.entity}.{operation}", arguments) from exc

    # -------------------------------- Reads ---------------------------------

    def query(self, trace_id: str) -> list[InfoT]:
        """
        Return every row in the entity's default order.

        :raises StorageError: On storage failure.
        """
        self.log_operation(trace_id, self.entity, "query")
        try:
            with self.ro_uow() as uow:
                return [from_row(self.info_type, row) for row in self._repo(uow).list()]
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.entity}.query") from exc

    def query_by_id(self, trace_id: str, entity_id: str) -> InfoT:
        """
        Return the row with ``entity_id``.

        :raises InvalidIDError: When ``entity_id`` is not a UUID.
        :raises NotFoundError: When no row matches.
        :raises StorageError: On storage failure.
        """
        self.ensure_valid_id(self.entity, entity_id)
        self.log_operation(trace_id, self.entity, "query_by_id", id=entity_id)
        try:
            with self.ro_uow() as uow:
                row = self._repo(uow).get(entity_id)
                if row is None:
                    raise NotFoundError(self.entity, entity_id)
                return from_row(self.info_type, row)
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.entity}.query_by_id", {"id": entity_id}) from exc

    # -------------------------------- Writes --------------------------------

    def create(self, trace_id: str, claims: Claims, new: NewT, now: datetime) -> InfoT:
        """
        Insert a new row and return it.

        The returned read model is built from the inserted values; the row is
        not read back.

        :raises ForbiddenError: When the caller is not an admin.
        :raises ConflictError: When the slug is taken or a reference is dangling.
        :raises StorageError: On any other storage failure.
        """
        self.ensure_admin(claims, f"{self.entity}.create")

        now = as_utc(now)
        values = self.normalize(to_values(new))
        info = self.info_type(id=new_id(), date_created=now, date_updated=now, **values)
        row = to_values(info)

        self.log_operation(trace_id, self.entity, "create", **row)
        self._write("create", {"id": info.id}, lambda repo: repo.insert(row))
        return info

    def update(
        self,
        trace_id: str,
        claims: Claims,
        entity_id: str,
        update: Update,
        now: datetime,
    ) -> None:
        """
        Apply a field-level patch to an existing row.

        Absent keys keep their stored value. Existence is checked before the
        role, so unknown ids report ``NotFoundError`` even to non-admins.

        :raises InvalidIDError: When ``entity_id`` is not a UUID.
        :raises NotFoundError: When no row matches.
        :raises ForbiddenError: When the caller is not an admin.
        :raises ValueError: When ``update`` carries non-writable keys.
        :raises ConflictError: When the new slug is taken.
        :raises StorageError: On any other storage failure.
        """
        current = self.query_by_id(trace_id, entity_id)
        self.ensure_admin(claims, f"{self.entity}.update")

        unknown = sorted(set(update) - self.writable())
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")

        values = {k: v for k, v in to_values(current).items() if k not in _SYSTEM_FIELDS}
        values.update(self.normalize(dict(update)))
        values["date_updated"] = updated_at(now, current.date_created)

        self.log_operation(trace_id, self.entity, "update", id=entity_id, **values)
        self._write("update", {"id": entity_id}, lambda repo: repo.update(entity_id, values))

    def delete(self, trace_id: str, claims: Claims, entity_id: str) -> None:
        """
        Delete a row. Deleting an id that does not exist succeeds.

        :raises ForbiddenError: When the caller is not an admin (checked first).
        :raises InvalidIDError: When ``entity_id`` is not a UUID.
        :raises StorageError: On storage failure.
        """
        self.ensure_admin(claims, f"{self.entity}.delete")
        self.ensure_valid_id(self.entity, entity_id)

        self.log_operation(trace_id, self.entity, "delete", id=entity_id)
        self._write("delete", {"id": entity_id}, lambda repo: repo.delete(entity_id))


class SluggedEntityService(EntityService[NewT, InfoT]):
    """Entity service for tables with a unique ``slug``."""

    def query_by_slug(self, trace_id: str, slug: str) -> InfoT:
        """
        Return the row whose slug is ``slug``. No format validation applies.

        :raises NotFoundError: When no row matches.
        :raises StorageError: On storage failure.
        """
        self.log_operation(trace_id, self.entity, "query_by_slug", slug=slug)
        try:
            with self.ro_uow() as uow:
                row = self._repo(uow).get_by_slug(slug)
                if row is None:
                    raise NotFoundError(self.entity, slug)
                return from_row(self.info_type, row)
        except SQLAlchemyError as exc:
            raise StorageError(f"{self.entity}.query_by_slug", {"slug": slug}) from exc


# ------------------------------ Instances ----------------------------------


class CategoryService(SluggedEntityService[NewCategory, CategoryInfo]):
    entity = "category"
    repository = "categories"
    new_type = NewCategory
    info_type = CategoryInfo


class ProductService(SluggedEntityService[NewProduct, ProductInfo]):
    """Products store money with two decimals; prices are rounded on write."""

    entity = "product"
    repository = "products"
    new_type = NewProduct
    info_type = ProductInfo

    PRICE_FIELDS: ClassVar[tuple[str, ...]] = ("price", "old_price")

    def normalize(self, values: dict[str, Any]) -> dict[str, Any]:
        for key in self.PRICE_FIELDS:
            if values.get(key) is not None:
                values[key] = round(float(values[key]), 2)
        return values


class BrandService(SluggedEntityService[NewBrand, BrandInfo]):
    entity = "brand"
    repository = "brands"
    new_type = NewBrand
    info_type = BrandInfo


class ArticleCategoryService(SluggedEntityService[NewArticleCategory, ArticleCategoryInfo]):
    entity = "article_category"
    repository = "article_categories"
    new_type = NewArticleCategory
    info_type = ArticleCategoryInfo


class ArticleService(SluggedEntityService[NewArticle, ArticleInfo]):
    entity = "article"
    repository = "articles"
    new_type = NewArticle
    info_type = ArticleInfo


class SlideService(EntityService[NewSlide, SlideInfo]):
    """Slides are addressed by id only; there is no slug lookup."""

    entity = "slide"
    repository = "slides"
    new_type = NewSlide
    info_type = SlideInfo
