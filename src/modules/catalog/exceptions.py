"""Catalog domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist."""


class InvalidProductImage(Exception):
    """The uploaded file is missing or is not an image."""


class ImageUploadFailed(Exception):
    """The storage backend could not persist the product image."""


class CategoryNotFound(Exception):
    """The category referenced by a product does not exist."""
