"""Account domain exceptions."""

from __future__ import annotations


class UsernameTaken(Exception):
    """Registration used a username that already exists."""


class InvalidCredentials(Exception):
    """Login failed: unknown user, wrong password or inactive account."""


class InvalidAccountRequest(Exception):
    """The request body is not a username/password object."""
