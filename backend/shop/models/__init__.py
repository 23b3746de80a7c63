from shop.models.article import Article, ArticleCategory
from shop.models.brand import Brand
from shop.models.category import Category
from shop.models.product import Product
from shop.models.slide import Slide
from shop.models.user import User

__all__ = [
    "Article",
    "ArticleCategory",
    "Brand",
    "Category",
    "Product",
    "Slide",
    "User",
]
