"""Checkout DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.  Field aliases
match the storefront client's camelCase JSON (``customerName``,
``productId``).  DTOs are immutable (``frozen=True``).

- ``OrderLineDTO``: one requested (product, quantity) pair.
- ``PlaceOrderDTO``: a checkout request.
- ``PlacedOrder``: the result of a committed checkout.

Any price or total the client sends is not part of these models and is
dropped during validation: prices are read from the catalog only.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, List

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    ValidationError,
    field_validator,
)

from modules.core.exceptions import describe_validation_error
from modules.orders.exceptions import InvalidOrderRequest

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class OrderLineDTO(BaseModel):
    """Immutable DTO for a single requested line."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: StrictInt = Field(alias="productId")
    quantity: StrictInt

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class PlaceOrderDTO(BaseModel):
    """Immutable DTO for checkout requests.

    Validates:
    - ``customer_name`` and ``address`` are non-empty; the name fits the
      256-character column.
    - ``items`` contains at least one line.
    - Each quantity is a positive integer.

    The same product may appear on several lines; each line is reserved
    separately against the latest stock.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    customer_name: str = Field(alias="customerName", max_length=256)
    address: str
    items: List[OrderLineDTO]

    @field_validator("customer_name", "address")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be empty.")
        return v.strip()

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(cls, v: List[OrderLineDTO]) -> List[OrderLineDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v

    @classmethod
    def from_payload(cls, payload: Any) -> PlaceOrderDTO:
        """Validate a decoded request body.

        Raises:
            InvalidOrderRequest: the payload is not a valid checkout request.
        """
        if not isinstance(payload, Mapping):
            raise InvalidOrderRequest("Request body must be a JSON object.")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidOrderRequest(describe_validation_error(exc)) from exc


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class PlacedOrder(BaseModel):
    """Immutable result of a committed checkout."""

    model_config = ConfigDict(frozen=True)

    order_id: int
    total: Decimal
