from shop.services.catalog.service import (
    ArticleCategoryService,
    ArticleService,
    BrandService,
    CategoryService,
    EntityService,
    ProductService,
    SlideService,
    SluggedEntityService,
)

__all__ = [
    "ArticleCategoryService",
    "ArticleService",
    "BrandService",
    "CategoryService",
    "EntityService",
    "ProductService",
    "SlideService",
    "SluggedEntityService",
]
