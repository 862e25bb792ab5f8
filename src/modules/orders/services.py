"""Checkout service layer (the Checkout Engine).

Turns a validated ``PlaceOrderDTO`` into a persisted Order, its
OrderItems and the matching stock decrements, all inside one unit of
work: either every write commits together or none of them is visible.

Business rules enforced:
- Items are processed in caller order; each product row is locked and
  re-read for every line, so duplicate products see earlier decrements.
- Stock must cover the requested quantity; a missing product counts as
  insufficient stock.
- Totals come from the stored price, never from the client.
- Transient database conflicts re-run the whole unit; anything else that
  stops the database from committing surfaces as ``TransactionFailed``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional, Union

import structlog
from django.conf import settings
from django.db import DatabaseError

from modules.orders.constants import (
    RETRYABLE_MESSAGES,
    RETRYABLE_SQLSTATES,
    OrderStatus,
)
from modules.orders.dtos import PlacedOrder
from modules.orders.exceptions import (
    CheckoutError,
    InsufficientStock,
    OrderNotFound,
    ProductNotFound,
    TransactionFailed,
)

if TYPE_CHECKING:
    from modules.orders.dtos import OrderLineDTO, PlaceOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.orders.unit_of_work import ICheckoutUnitOfWork

logger = structlog.get_logger(__name__)

ZERO = Decimal("0.00")
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LineResult:
    """Outcome of reserving one requested line."""

    subtotal: Decimal = ZERO
    error: Optional[CheckoutError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: CheckoutError) -> LineResult:
        return cls(error=error)


def is_retryable(exc: DatabaseError) -> bool:
    """Serialization failures, deadlocks and lock timeouts are worth a retry."""
    cause = exc.__cause__
    code = getattr(exc, "pgcode", None) or getattr(cause, "pgcode", None)
    if code is None:
        code = getattr(cause, "sqlstate", None)
    if code in RETRYABLE_SQLSTATES:
        return True
    message = str(exc).lower()
    return any(fragment in message for fragment in RETRYABLE_MESSAGES)


class CheckoutService:
    """Application service for checkout.

    Stateless between calls.  Receives a factory producing a fresh unit
    of work per attempt (DIP), so tests can substitute an in-memory store.
    """

    def __init__(
        self,
        unit_of_work_factory: Callable[[], ICheckoutUnitOfWork],
        max_attempts: Optional[int] = None,
        retry_backoff: Optional[float] = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._max_attempts = max(
            1, max_attempts if max_attempts is not None else settings.CHECKOUT_MAX_ATTEMPTS
        )
        self._retry_backoff = (
            retry_backoff if retry_backoff is not None else settings.CHECKOUT_RETRY_BACKOFF
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def place_order(self, dto: PlaceOrderDTO) -> PlacedOrder:
        """Place an order atomically.

        Raises:
            ProductNotFound: a requested product does not exist.
            InsufficientStock: a product cannot cover its quantity.
            TransactionFailed: the database could not commit.

        Nothing is persisted when any of these is raised.
        """
        log = logger.bind(customer_name=dto.customer_name, line_count=len(dto.items))
        log.info("checkout.started")

        attempt = 0
        while True:
            attempt += 1
            try:
                outcome = self._run_unit(dto)
                break
            except DatabaseError as exc:
                if attempt < self._max_attempts and is_retryable(exc):
                    log.warning("checkout.retrying", attempt=attempt, error=str(exc))
                    time.sleep(self._retry_backoff * attempt)
                    continue
                log.error("checkout.transaction_failed", attempt=attempt, error=str(exc))
                raise TransactionFailed(
                    "The order could not be saved. Please try again."
                ) from exc

        if isinstance(outcome, CheckoutError):
            log.info("checkout.rejected", reason=str(outcome))
            raise outcome

        log.info("checkout.completed", order_id=outcome.order_id, total=str(outcome.total))
        return outcome

    # ------------------------------------------------------------------
    # Transaction body
    # ------------------------------------------------------------------

    def _run_unit(self, dto: PlaceOrderDTO) -> Union[PlacedOrder, CheckoutError]:
        """One attempt: returns the placed order, or the error that rolled it back."""
        with self._uow_factory() as uow:
            order = uow.orders.insert_order(
                {
                    "customer_name": dto.customer_name,
                    "address": dto.address,
                    "total_amount": ZERO,
                    "status": OrderStatus.PENDING,
                }
            )

            total = ZERO
            for line in dto.items:
                result = self._reserve_line(uow, order.id, line)
                if not result.ok:
                    uow.rollback()
                    return result.error
                total += result.subtotal

            total = total.quantize(CENTS)
            uow.orders.update_order_total(order.id, total)

        return PlacedOrder(order_id=order.id, total=total)

    def _reserve_line(
        self, uow: ICheckoutUnitOfWork, order_id: int, line: OrderLineDTO
    ) -> LineResult:
        product = uow.products.get_for_update(line.product_id)
        if product is None:
            return LineResult.failed(
                ProductNotFound(
                    f"Insufficient stock for product #{line.product_id}: "
                    "product does not exist."
                )
            )
        if product.stock < line.quantity:
            label = product.name or f"product #{product.id}"
            return LineResult.failed(
                InsufficientStock(
                    f"Insufficient stock for {label}: "
                    f"requested {line.quantity}, available {product.stock}."
                )
            )

        uow.orders.insert_order_item(
            {
                "order_id": order_id,
                "product_id": product.id,
                "quantity": line.quantity,
                "price_at_time": product.price,
            }
        )
        remaining = product.stock - line.quantity
        uow.products.update_stock(product.id, remaining)

        logger.info(
            "checkout.line_reserved",
            order_id=order_id,
            product_id=product.id,
            quantity=line.quantity,
            remaining=remaining,
        )
        return LineResult(subtotal=product.price * line.quantity)


class OrderQueryService:
    """Read side of the Order Ledger."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def get_order(self, order_id: int) -> Order:
        """Retrieve a single order with its items.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order
