"""Service layer: use cases over units of work, framework-agnostic."""

from shop.services._shared.base import BaseService
from shop.services._shared.errors import (
    AuthenticationFailure,
    ConflictError,
    ErrorKind,
    ForbiddenError,
    InvalidIDError,
    NotFoundError,
    ServiceError,
    StorageError,
)
from shop.services.cart import CartLine, CartService
from shop.services.catalog import (
    ArticleCategoryService,
    ArticleService,
    BrandService,
    CategoryService,
    EntityService,
    ProductService,
    SlideService,
    SluggedEntityService,
)
from shop.services.users import NewUser, UserInfo, UserService

__all__ = [
    "ArticleCategoryService",
    "ArticleService",
    "AuthenticationFailure",
    "BaseService",
    "BrandService",
    "CartLine",
    "CartService",
    "CategoryService",
    "ConflictError",
    "EntityService",
    "ErrorKind",
    "ForbiddenError",
    "InvalidIDError",
    "NewUser",
    "NotFoundError",
    "ProductService",
    "ServiceError",
    "SlideService",
    "SluggedEntityService",
    "StorageError",
    "UserInfo",
    "UserService",
]
