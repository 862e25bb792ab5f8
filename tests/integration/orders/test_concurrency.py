"""Stock concurrency integration test.

Proves that ``SELECT FOR UPDATE`` in the checkout serializes concurrent
stock reservations.

Scenario:
- Product "Last Unit" with **stock = 5**.
- 10 threads attempt to buy 1 unit each simultaneously.
- Exactly 5 succeed, 5 raise ``InsufficientStock``.
- Final stock is 0 (never negative).

Uses ``TransactionTestCase`` so each thread sees committed data.  Needs
a backend with row locks (PostgreSQL); skipped on SQLite.
"""

from __future__ import annotations

import unittest
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from django.db import connection, connections
from django.test import TransactionTestCase

from modules.catalog.models import Product
from modules.orders.dtos import PlaceOrderDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import OrderItem
from modules.orders.services import CheckoutService
from modules.orders.unit_of_work import DjangoCheckoutUnitOfWork

INITIAL_STOCK = 5
NUM_WORKERS = 10


@unittest.skipUnless(
    connection.features.has_select_for_update,
    "requires row-level locking",
)
class TestStockConcurrency(TransactionTestCase):
    """Prove atomic stock reservation under concurrent load."""

    def setUp(self):
        self.product = Product.objects.create(
            name="Last Unit", price=Decimal("49.90"), stock=INITIAL_STOCK
        )

    def _checkout_in_thread(self, thread_id: int) -> str:
        service = CheckoutService(DjangoCheckoutUnitOfWork)
        dto = PlaceOrderDTO(
            customer_name=f"Buyer {thread_id}",
            address="Rua A, 1",
            items=[{"product_id": self.product.id, "quantity": 1}],
        )
        try:
            service.place_order(dto)
            return "success"
        except InsufficientStock:
            return "insufficient"
        finally:
            connections.close_all()

    def test_concurrent_orders_exhaust_stock(self):
        """10 threads buy 1 unit from stock=5: exactly 5 succeed."""
        with ThreadPoolExecutor(max_workers=NUM_WORKERS) as pool:
            results = list(pool.map(self._checkout_in_thread, range(NUM_WORKERS)))

        self.assertEqual(results.count("success"), INITIAL_STOCK)
        self.assertEqual(results.count("insufficient"), NUM_WORKERS - INITIAL_STOCK)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)

        # Conservation: initial = sold + remaining
        sold = sum(OrderItem.objects.values_list("quantity", flat=True))
        self.assertEqual(INITIAL_STOCK, sold + self.product.stock)
