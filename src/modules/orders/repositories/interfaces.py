"""Order repository interface (the Order Ledger contract).

Extends ``IRepository[Order]`` with the writes the checkout transaction
performs: insert the order, append its line items, and set its total
once.  Orders are otherwise append-only.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def insert_order(self, data: Dict[str, Any]) -> Order:
        """Create an order row and return it with its generated id.

        ``data`` keys: ``customer_name``, ``address``, ``total_amount``,
        ``status``.
        """

    @abstractmethod
    def insert_order_item(self, data: Dict[str, Any]) -> OrderItem:
        """Append a line item.

        ``data`` keys: ``order_id``, ``product_id``, ``quantity``,
        ``price_at_time``.
        """

    @abstractmethod
    def update_order_total(self, order_id: int, total: Decimal) -> None:
        """Set the order's total amount."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with its items prefetched."""
