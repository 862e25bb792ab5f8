"""Account DTOs (Pydantic v2, immutable)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modules.accounts.exceptions import InvalidAccountRequest
from modules.core.exceptions import describe_validation_error


class CredentialsDTO(BaseModel):
    """Username/password pair used by both registration and login."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(max_length=150)
    password: str = Field(repr=False)

    @field_validator("username")
    @classmethod
    def username_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Username must not be empty.")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("Password must not be empty.")
        return v

    @classmethod
    def from_payload(cls, payload: Any) -> CredentialsDTO:
        """Validate a decoded request body.

        Missing fields count as empty.

        Raises:
            InvalidAccountRequest: the payload is not a valid credentials object.
        """
        if not isinstance(payload, Mapping):
            raise InvalidAccountRequest("Request body must be a JSON object.")
        try:
            return cls(
                username=payload.get("username", ""),
                password=payload.get("password", ""),
            )
        except ValidationError as exc:
            raise InvalidAccountRequest(describe_validation_error(exc)) from exc
