"""Unit of Work — the scoped transaction handle.

A unit of work groups the repository reads and writes of one use case
into a single atomic, isolated transaction against the store::

    with unit_of_work() as uow:
        products = uow.products.get_many(ids)
        ...
        uow.commit()

Leaving the ``with`` block without ``commit()`` (including through an
exception) rolls everything back. The underlying store resource (lock,
session) is released on every exit path.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    users: UserRepository

    def __enter__(self) -> UnitOfWork:
        self._committed = False
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if not self._committed:
                self.rollback()
        finally:
            self._release()

    def commit(self) -> None:
        self._commit()
        self._committed = True

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change made since the unit of work began."""

    @abstractmethod
    def _begin(self) -> None:
        """Acquire the store resource and bind the repositories."""

    @abstractmethod
    def _commit(self) -> None:
        """Make every change durable at once."""

    @abstractmethod
    def _release(self) -> None:
        """Release the store resource. Must not raise."""
