"""
Unit tests for ProductDjangoRepository.

Tests cover: look-ups, locked reads, stock updates, listing order and
filters, insertion and category checks.
"""

from decimal import Decimal

import pytest

from modules.catalog.models import Category, Product
from modules.catalog.repositories import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


@pytest.fixture()
def category():
    return Category.objects.create(name="Drinks")


@pytest.fixture()
def product(category):
    return Product.objects.create(
        name="Coffee", price=Decimal("10.00"), stock=5, category=category
    )


class TestProductRepositoryReads:
    def test_get_by_id(self, repo, product):
        found = repo.get_by_id(product.id)
        assert found == product
        assert found.category.name == "Drinks"

    def test_get_by_id_missing(self, repo):
        assert repo.get_by_id(999999) is None

    def test_get_by_id_invalid(self, repo):
        assert repo.get_by_id("not-an-id") is None

    def test_get_for_update(self, repo, product):
        locked = repo.get_for_update(product.id)
        assert locked.id == product.id
        assert locked.stock == 5

    def test_get_for_update_missing(self, repo):
        assert repo.get_for_update(999999) is None

    def test_list_is_newest_first(self, repo):
        first = Product.objects.create(name="A", price=Decimal("1.00"), stock=1)
        second = Product.objects.create(name="B", price=Decimal("2.00"), stock=1)

        ids = [p.id for p in repo.list()]

        assert ids == [second.id, first.id]

    def test_list_with_filters(self, repo, product, category):
        Product.objects.create(name="Bread", price=Decimal("3.00"), stock=2)

        result = list(repo.list({"category_id": category.id}))

        assert result == [product]


class TestProductRepositoryWrites:
    def test_update_stock(self, repo, product):
        repo.update_stock(product.id, 2)

        product.refresh_from_db()
        assert product.stock == 2

    def test_insert(self, repo, category):
        product = repo.insert(
            {
                "name": "Tea",
                "price": Decimal("2.50"),
                "stock": 10,
                "category_id": category.id,
                "image_url": "/media/products/prod_1_tea.png",
            }
        )

        assert product.id is not None
        stored = Product.objects.get(id=product.id)
        assert stored.image_url == "/media/products/prod_1_tea.png"
        assert stored.category_id == category.id

    def test_category_exists(self, repo, category):
        assert repo.category_exists(category.id)
        assert not repo.category_exists(category.id + 1000)
