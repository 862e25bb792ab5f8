"""Checkout domain exceptions.

Raised by the Service Layer (or by DTO parsing, for malformed requests).
The API layer (Views) catches these and translates them into
``{"success": false, "message": ...}`` responses.
"""

from __future__ import annotations


class CheckoutError(Exception):
    """Base class for every checkout failure."""


class InvalidOrderRequest(CheckoutError):
    """The request is malformed or misses required fields.

    Raised before the store is touched, so it has no side effects.
    """


class InsufficientStock(CheckoutError):
    """A product cannot satisfy the requested quantity.

    The whole checkout is rolled back; no partial order survives.
    """


class ProductNotFound(InsufficientStock):
    """A requested product id does not exist.

    Handled exactly like ``InsufficientStock``.
    """


class TransactionFailed(CheckoutError):
    """The database could not commit the checkout (conflict, lost connection).

    Everything done by the attempt has been rolled back.
    """


class OrderNotFound(Exception):
    """The requested order does not exist."""
