"""Account service layer (Use Cases).

Password hashing and verification are delegated to Django's auth
framework; bearer tokens are issued by SimpleJWT and carry the user id.
Registered accounts are store administrators (``is_staff``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from rest_framework_simplejwt.tokens import AccessToken

from modules.accounts.exceptions import InvalidCredentials, UsernameTaken

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

    from modules.accounts.dtos import CredentialsDTO

logger = structlog.get_logger(__name__)


class AccountService:
    """Application service for registration and login."""

    @transaction.atomic
    def register(self, dto: CredentialsDTO) -> AbstractBaseUser:
        """Create a staff account.

        Raises:
            UsernameTaken: if the username is already registered.
        """
        User = get_user_model()
        log = logger.bind(username=dto.username)

        if User.objects.filter(username=dto.username).exists():
            log.warning("account.username_taken")
            raise UsernameTaken(f"Username '{dto.username}' is already taken.")

        user = User.objects.create_user(
            username=dto.username, password=dto.password, is_staff=True
        )
        log.info("account.registered", user_id=user.pk)
        return user

    def login(self, dto: CredentialsDTO) -> str:
        """Check the credentials and return a signed access token.

        Raises:
            InvalidCredentials: unknown user, wrong password or inactive user.
        """
        user = authenticate(username=dto.username, password=dto.password)
        if user is None:
            logger.warning("account.login_failed", username=dto.username)
            raise InvalidCredentials("Invalid username or password.")

        token = AccessToken.for_user(user)
        logger.info("account.logged_in", user_id=user.pk)
        return str(token)
