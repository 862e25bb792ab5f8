from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """Anonymous DRF APIClient; checkout and catalog reads are public."""
    return APIClient()


@pytest.fixture()
def auth_client():
    """APIClient with a force-authenticated staff user."""
    client = APIClient()
    user = get_user_model().objects.create_user(
        username="staff", password="testpass123", is_staff=True
    )
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_product():
    """Factory for catalog products: ``make_product("Coffee", "10.00", 5)``."""

    from modules.catalog.models import Product

    def _make(name="Coffee", price="10.00", stock=5, **extra):
        return Product.objects.create(
            name=name, price=Decimal(price), stock=stock, **extra
        )

    return _make


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid
