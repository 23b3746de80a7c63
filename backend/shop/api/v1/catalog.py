"""Catalog endpoints: one CRUD blueprint per entity.

Reads are public. Writes take a bearer token; the services decide whether the
caller's roles allow the change.
"""

from __future__ import annotations

from flask import Blueprint
from marshmallow import Schema

from shop.api.deps import (
    json_response,
    load_json,
    no_content,
    request_values,
    require_auth,
    timing,
)
from shop.auth import Claims
from shop.schemas import (
    ArticleCategoryCreateSchema,
    ArticleCategorySchema,
    ArticleCreateSchema,
    ArticleSchema,
    BrandCreateSchema,
    BrandSchema,
    CategoryCreateSchema,
    CategorySchema,
    ProductCreateSchema,
    ProductSchema,
    SlideCreateSchema,
    SlideSchema,
)
from shop.services import (
    ArticleCategoryService,
    ArticleService,
    BrandService,
    CategoryService,
    EntityService,
    ProductService,
    SlideService,
    SluggedEntityService,
)


def make_blueprint(
    name: str,
    service: EntityService,
    create_schema: Schema,
    dump_schema: Schema,
) -> Blueprint:
    """
    Build the CRUD blueprint for one catalog entity.

    Parameters
    ----------
    name:
        Blueprint name, also used in endpoint names (``"categories"``).
    service:
        Service instance handling the entity.
    create_schema:
        Schema validating POST bodies; loaded with ``partial=True`` for updates.
    dump_schema:
        Schema rendering read models.

    Notes
    -----
    ``GET /slug/<slug>`` is only registered when ``service`` supports slugs.
    """

    bp = Blueprint(name, __name__)
    many = dump_schema.__class__(many=True)

    @bp.get("")
    @timing
    def list_items():
        values = request_values()
        return json_response(many.dump(service.query(values.trace_id)))

    @bp.get("/<entity_id>")
    @timing
    def get_item(entity_id: str):
        values = request_values()
        return json_response(dump_schema.dump(service.query_by_id(values.trace_id, entity_id)))

    if isinstance(service, SluggedEntityService):

        @bp.get("/slug/<slug>")
        @timing
        def get_item_by_slug(slug: str):
            values = request_values()
            return json_response(dump_schema.dump(service.query_by_slug(values.trace_id, slug)))

    @bp.post("")
    @timing
    @require_auth
    def create_item(claims: Claims):
        payload = load_json(create_schema)
        values = request_values()
        info = service.create(values.trace_id, claims, service.new_type(**payload), values.now)
        return json_response(dump_schema.dump(info), status=201)

    @bp.route("/<entity_id>", methods=["PUT", "PATCH"])
    @timing
    @require_auth
    def update_item(entity_id: str, claims: Claims):
        payload = load_json(create_schema, partial=True)
        values = request_values()
        service.update(values.trace_id, claims, entity_id, payload, values.now)
        return no_content()

    @bp.delete("/<entity_id>")
    @timing
    @require_auth
    def delete_item(entity_id: str, claims: Claims):
        values = request_values()
        service.delete(values.trace_id, claims, entity_id)
        return no_content()

    return bp


categories_bp = make_blueprint(
    "categories", CategoryService(), CategoryCreateSchema(), CategorySchema()
)
products_bp = make_blueprint("products", ProductService(), ProductCreateSchema(), ProductSchema())
brands_bp = make_blueprint("brands", BrandService(), BrandCreateSchema(), BrandSchema())
article_categories_bp = make_blueprint(
    "article_categories",
    ArticleCategoryService(),
    ArticleCategoryCreateSchema(),
    ArticleCategorySchema(),
)
articles_bp = make_blueprint("articles", ArticleService(), ArticleCreateSchema(), ArticleSchema())
slides_bp = make_blueprint("slides", SlideService(), SlideCreateSchema(), SlideSchema())
