"""Catalog DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  Product
uploads arrive as multipart form fields (all strings); Pydantic's lax
mode coerces them into the declared types.  DTOs are immutable
(``frozen=True``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a PositiveIntegerField column holds on every backend.
MAX_STOCK = 2_147_483_647


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string of at most 256 characters.
    - ``price`` is a Decimal greater than zero that fits ``numeric(12, 2)``.
    - ``stock`` is non-negative and fits a 32-bit integer column.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(max_length=256)
    price: Decimal = Field(max_digits=12, decimal_places=2)
    stock: int = Field(le=MAX_STOCK)
    description: str = ""
    category_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v.quantize(Decimal("0.01"))

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v

    @field_validator("category_id", mode="before")
    @classmethod
    def blank_category_is_none(cls, v: Any) -> Any:
        if v in ("", None):
            return None
        return v
