"""Product repository interface (the Catalog Store contract).

Extends ``IRepository[Product]`` with the operations the checkout
transaction and the catalog upload flow need: locked reads, stock
updates, ordered listing and insertion.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, Optional

from django.db.models import QuerySet

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.catalog.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Product]:
        """Retrieve a product with a row-level lock (SELECT FOR UPDATE).

        Must be called inside a transaction; the lock is held until it
        commits or rolls back.  Returns ``None`` if the product does not
        exist.
        """

    @abstractmethod
    def update_stock(self, id: int, new_stock: int) -> None:
        """Persist a new stock count for the product."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> QuerySet[Product]:
        """List products, newest first (ordered by id descending)."""

    @abstractmethod
    def insert(self, data: Dict[str, Any]) -> Product:
        """Create a product from a dict of field values."""

    @abstractmethod
    def category_exists(self, id: int) -> bool:
        """Check whether a category with the given id exists."""
