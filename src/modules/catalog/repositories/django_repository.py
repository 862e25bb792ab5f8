"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
instead of raising, the Service Layer decides how to translate a missing
entity into an API response.

Every query runs on the database alias given at construction time.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.utils import timezone

from modules.catalog.models import Category, Product
from modules.catalog.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _queryset(self):
        return Product.objects.using(self.using)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._queryset().select_related("category").filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def get_for_update(self, id: int) -> Optional[Product]:
        """Lock and return the product row, or ``None`` if it does not exist.

        ``select_for_update`` is a no-op on backends without row locks
        (SQLite), where the database-wide write lock serializes writers.
        """
        try:
            return self._queryset().select_for_update().filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products, newest first, with optional Django ORM look-ups.

        Examples of valid filters::

            {"category_id": 2}
            {"name__icontains": "coffee"}
        """
        queryset = self._queryset().select_related("category").order_by("-id")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, data: Dict[str, Any]) -> Product:
        """Create a product.

        ``data`` keys: ``name``, ``price``, ``stock`` (required);
        ``description``, ``image_url``, ``category_id`` (optional).
        """
        product = Product(**data)
        product.save(using=self.using)
        logger.info("product.inserted", product_id=product.id, name=product.name)
        return product

    def update_stock(self, id: int, new_stock: int) -> None:
        """Write ``new_stock`` straight to the row (no read-modify-write)."""
        self._queryset().filter(id=id).update(stock=new_stock, updated_at=timezone.now())
        logger.info("product.stock_updated", product_id=id, stock=new_stock)

    def category_exists(self, id: int) -> bool:
        return Category.objects.using(self.using).filter(id=id).exists()
