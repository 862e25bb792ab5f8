"""
Unit tests for AccountService.

Tests cover: registration of staff accounts, duplicate usernames,
login token issuance and rejected credentials.
"""

import pytest
from django.contrib.auth import get_user_model
from pydantic import ValidationError
from rest_framework_simplejwt.tokens import AccessToken

from modules.accounts.dtos import CredentialsDTO
from modules.accounts.exceptions import (
    InvalidAccountRequest,
    InvalidCredentials,
    UsernameTaken,
)
from modules.accounts.services import AccountService

pytestmark = pytest.mark.unit

User = get_user_model()


@pytest.fixture()
def service():
    return AccountService()


@pytest.fixture()
def credentials():
    return CredentialsDTO(username="admin", password="admin123")


class TestRegister:
    def test_creates_staff_user_with_hashed_password(self, service, credentials):
        user = service.register(credentials)

        assert user.is_staff
        assert user.password != "admin123"
        assert user.check_password("admin123")

    def test_duplicate_username_rejected(self, service, credentials):
        service.register(credentials)

        with pytest.raises(UsernameTaken):
            service.register(credentials)

        assert User.objects.filter(username="admin").count() == 1


class TestLogin:
    def test_returns_token_for_user(self, service, credentials):
        user = service.register(credentials)

        token = service.login(credentials)

        assert str(AccessToken(token)["user_id"]) == str(user.pk)

    def test_wrong_password_rejected(self, service, credentials):
        service.register(credentials)

        with pytest.raises(InvalidCredentials):
            service.login(CredentialsDTO(username="admin", password="nope"))

    def test_unknown_user_rejected(self, service, credentials):
        with pytest.raises(InvalidCredentials):
            service.login(credentials)

    def test_inactive_user_rejected(self, service, credentials):
        user = service.register(credentials)
        user.is_active = False
        user.save()

        with pytest.raises(InvalidCredentials):
            service.login(credentials)


class TestCredentialsDTO:
    def test_password_hidden_from_repr(self, credentials):
        assert "admin123" not in repr(credentials)

    @pytest.mark.parametrize("field", ["username", "password"])
    def test_empty_values_rejected(self, field):
        data = {"username": "admin", "password": "admin123", field: ""}
        with pytest.raises(ValidationError):
            CredentialsDTO(**data)


class TestCredentialsFromPayload:
    def test_reads_mapping(self):
        dto = CredentialsDTO.from_payload({"username": " admin ", "password": "pw"})
        assert dto.username == "admin"
        assert dto.password == "pw"

    @pytest.mark.parametrize("payload", [[1, 2], "admin", None, 7])
    def test_non_object_rejected(self, payload):
        with pytest.raises(InvalidAccountRequest, match="JSON object"):
            CredentialsDTO.from_payload(payload)

    def test_missing_password_rejected(self):
        with pytest.raises(InvalidAccountRequest, match="password"):
            CredentialsDTO.from_payload({"username": "admin"})

    def test_non_string_username_rejected(self):
        with pytest.raises(InvalidAccountRequest, match="username"):
            CredentialsDTO.from_payload({"username": 42, "password": "pw"})
