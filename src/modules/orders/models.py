"""Order and OrderItem models (the Order Ledger).

Business rules implemented:
- An Order is created once per checkout with a zero total and ``pending``
  status; its total is written once, after every line item is recorded.
- OrderItem snapshots the product price at purchase time
  (``price_at_time``), so historical order value never follows later
  price changes.
- OrderItem rows are immutable once created.
- Product FK uses PROTECT: a product that was sold cannot be removed.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus


class Order(BaseModel):
    """Order aggregate root; the transaction root of a checkout."""

    customer_name: models.CharField = models.CharField(max_length=256)
    address: models.TextField = models.TextField()
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="orders_created_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"


class ImmutableOrderItem(Exception):
    """An existing order line was about to be modified."""


class OrderItem(BaseModel):
    """Line item linking an Order to a Product.

    ``price_at_time`` is a **snapshot** of the product price at the time of
    purchase.  Rows are write-once: saving an already persisted item
    raises ``ImmutableOrderItem``.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product: models.ForeignKey = models.ForeignKey(
        "catalog.Product",
        on_delete=models.PROTECT,
        related_name="order_items",
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    price_at_time: models.DecimalField = models.DecimalField(
        max_digits=12,
        decimal_places=2,
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self) -> Decimal:
        return self.price_at_time * self.quantity

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise ImmutableOrderItem(f"Order item {self.pk} cannot be modified.")
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} @ {self.price_at_time}"
