"""
Unit tests for ProductService.

Tests cover: product creation with image upload, category validation,
image clean-up when the insert fails, and catalog queries.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.core.files.storage import InMemoryStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import IntegrityError

from modules.catalog.dtos import CreateProductDTO
from modules.catalog.exceptions import (
    CategoryNotFound,
    InvalidProductImage,
    ProductNotFound,
)
from modules.catalog.models import Category, Product
from modules.catalog.repositories import ProductDjangoRepository
from modules.catalog.services import ProductService
from modules.catalog.storage import ProductImageStorage

pytestmark = pytest.mark.unit


@pytest.fixture()
def file_storage():
    return InMemoryStorage(base_url="/media/")


@pytest.fixture()
def service(file_storage):
    return ProductService(ProductDjangoRepository(), ProductImageStorage(file_storage))


def _image():
    return SimpleUploadedFile("coffee bag.jpg", b"jpeg", content_type="image/jpeg")


class TestCreateProduct:
    def test_creates_product_with_image(self, service, file_storage):
        category = Category.objects.create(name="Drinks")
        dto = CreateProductDTO(
            name="Coffee", price="12.90", stock=4, category_id=category.id
        )

        product = service.create_product(dto, _image())

        stored = Product.objects.get(id=product.id)
        assert stored.price == Decimal("12.90")
        assert stored.stock == 4
        assert stored.category_id == category.id
        assert stored.image_url.startswith("/media/products/prod_")
        assert stored.image_url.endswith("_coffee_bag.jpg")
        assert file_storage.exists(stored.image_url.removeprefix("/media/"))

    def test_unknown_category_rejected_before_upload(self, service, file_storage):
        dto = CreateProductDTO(name="Coffee", price="1.00", stock=1, category_id=404)

        with pytest.raises(CategoryNotFound):
            service.create_product(dto, _image())

        assert Product.objects.count() == 0
        assert file_storage.listdir("")[1] == []

    def test_missing_image_rejected(self, service):
        dto = CreateProductDTO(name="Coffee", price="1.00", stock=1)

        with pytest.raises(InvalidProductImage):
            service.create_product(dto, None)

        assert Product.objects.count() == 0

    def test_image_removed_when_insert_fails(self, service, file_storage):
        dto = CreateProductDTO(name="Coffee", price="1.00", stock=1)

        with patch.object(
            ProductDjangoRepository, "insert", side_effect=IntegrityError("boom")
        ):
            with pytest.raises(IntegrityError):
                service.create_product(dto, _image())

        assert file_storage.listdir("products")[1] == []


class TestQueries:
    def test_list_products(self, service):
        a = Product.objects.create(name="A", price=Decimal("1.00"), stock=1)
        b = Product.objects.create(name="B", price=Decimal("1.00"), stock=0)

        assert list(service.list_products()) == [b, a]
        assert list(service.list_products({"stock__gt": 0})) == [a]

    def test_get_product(self, service):
        product = Product.objects.create(name="A", price=Decimal("1.00"), stock=1)
        assert service.get_product(product.id) == product

    def test_get_product_missing(self, service):
        with pytest.raises(ProductNotFound):
            service.get_product(999999)
