"""Factory Boy definitions for catalog models."""

from __future__ import annotations

import factory

from shop.models import Article, ArticleCategory, Brand, Category, Product, Slide
from tests.factories import BaseFactory


class _PageFactory(BaseFactory):
    class Meta:
        abstract = True

    title = factory.Faker("sentence", nb_words=3)
    slug = factory.Sequence(lambda n: f"page-{n}")
    image = factory.Faker("image_url")
    description = factory.Faker("paragraph")
    meta_title = factory.LazyAttribute(lambda o: o.title)
    meta_keywords = ""
    meta_description = ""


class CategoryFactory(_PageFactory):
    class Meta:
        model = Category

    slug = factory.Sequence(lambda n: f"category-{n}")
    parent_id = None


class BrandFactory(_PageFactory):
    class Meta:
        model = Brand

    slug = factory.Sequence(lambda n: f"brand-{n}")


class ProductFactory(_PageFactory):
    class Meta:
        model = Product

    slug = factory.Sequence(lambda n: f"product-{n}")
    category_id = None
    brand_id = None
    price = factory.Faker("pyfloat", right_digits=2, min_value=1, max_value=500)
    old_price = 0.0
    short_description = factory.Faker("sentence")


class ArticleCategoryFactory(_PageFactory):
    class Meta:
        model = ArticleCategory

    slug = factory.Sequence(lambda n: f"article-category-{n}")


class ArticleFactory(_PageFactory):
    class Meta:
        model = Article

    slug = factory.Sequence(lambda n: f"article-{n}")
    category_id = None


class SlideFactory(BaseFactory):
    class Meta:
        model = Slide

    title = factory.Faker("sentence", nb_words=3)
    link = factory.Faker("url")
    image = factory.Faker("image_url")
    sub_title = factory.Faker("sentence", nb_words=5)
