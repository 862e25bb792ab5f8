"""Unit tests for the ``seed_data`` management command."""

from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from modules.catalog.models import Category

pytestmark = pytest.mark.unit

User = get_user_model()


def _seed(*args):
    out = StringIO()
    call_command("seed_data", *args, stdout=out)
    return out.getvalue()


class TestSeedData:
    def test_creates_admin_and_categories(self):
        output = _seed()

        admin = User.objects.get(username="admin")
        assert admin.is_staff
        assert admin.check_password("admin123")
        assert sorted(Category.objects.values_list("name", flat=True)) == [
            "Clothing",
            "Drinks",
            "Food",
        ]
        assert "users=1, categories=3" in output

    def test_is_idempotent(self):
        _seed()
        output = _seed()

        assert User.objects.filter(username="admin").count() == 1
        assert Category.objects.count() == 3
        assert "users=0, categories=0" in output

    def test_custom_admin_password(self):
        _seed("--admin-password", "changeme")
        assert User.objects.get(username="admin").check_password("changeme")
