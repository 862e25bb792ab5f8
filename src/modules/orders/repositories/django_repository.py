"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  The
repository does not open transactions of its own: the checkout unit of
work owns the transaction, and every query here runs on the database
alias the repository was bound to.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional

import structlog
from django.core.exceptions import ValidationError
from django.utils import timezone

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert_order(self, data: Dict[str, Any]) -> Order:
        order = Order(**data)
        order.save(using=self.using)
        logger.info("order.inserted", order_id=order.id)
        return order

    def insert_order_item(self, data: Dict[str, Any]) -> OrderItem:
        item = OrderItem(**data)
        item.save(using=self.using)
        logger.info(
            "order.item_inserted",
            order_id=item.order_id,
            product_id=item.product_id,
            quantity=item.quantity,
        )
        return item

    def update_order_total(self, order_id: int, total: Decimal) -> None:
        Order.objects.using(self.using).filter(id=order_id).update(
            total_amount=total, updated_at=timezone.now()
        )
        logger.info("order.total_updated", order_id=order_id, total=str(total))

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with eager-loaded items and their products.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return (
                Order.objects.using(self.using)
                .prefetch_related("items__product")
                .filter(id=id)
                .first()
            )
        except (ValueError, TypeError, ValidationError):
            return None
