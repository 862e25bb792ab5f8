"""Transaction scope for the checkout.

A unit of work is the handle the Checkout Engine receives instead of
reaching for a global connection: entering it opens one database
transaction, and the ``products`` / ``orders`` repositories it exposes
are bound to that transaction's connection.

Leaving the block commits, unless an exception escaped or ``rollback()``
was called, in which case every write made inside it is undone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType
from typing import Optional, Type

from django.db import DEFAULT_DB_ALIAS, transaction

from modules.catalog.repositories.django_repository import ProductDjangoRepository
from modules.catalog.repositories.interfaces import IProductRepository
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository


class ICheckoutUnitOfWork(ABC):
    """Contract the Checkout Engine depends on."""

    products: IProductRepository
    orders: IOrderRepository

    @abstractmethod
    def __enter__(self) -> ICheckoutUnitOfWork:
        """Begin the transaction."""

    @abstractmethod
    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        """Commit, or roll back if an exception escaped or a rollback was requested."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every write of this unit when the block exits."""


class DjangoCheckoutUnitOfWork(ICheckoutUnitOfWork):
    """Unit of work over ``transaction.atomic`` on one database alias.

    Nested inside an outer ``atomic`` block (e.g. a test case) it becomes a
    savepoint, and ``rollback()`` rolls back to that savepoint only.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self.using = using
        self.products = ProductDjangoRepository(using=using)
        self.orders = OrderDjangoRepository(using=using)
        self._atomic: Optional[transaction.Atomic] = None

    def __enter__(self) -> DjangoCheckoutUnitOfWork:
        if self._atomic is not None:
            raise RuntimeError("Unit of work is already active.")
        self._atomic = transaction.atomic(using=self.using)
        self._atomic.__enter__()
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        atomic, self._atomic = self._atomic, None
        if atomic is not None:
            atomic.__exit__(exc_type, exc, tb)

    def rollback(self) -> None:
        if self._atomic is None:
            raise RuntimeError("Unit of work is not active.")
        transaction.set_rollback(True, using=self.using)
