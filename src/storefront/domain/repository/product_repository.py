"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, MongoDB, in-memory)
live in the infrastructure layer and are always bound to a unit of work.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate a new unique product ID."""

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: list[str]) -> list[Product]:
        """Return every product whose ID is in *product_ids* (one lookup).

        Unknown IDs are silently skipped; the caller compares sizes.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def list_by_seller(self, seller_id: str) -> list[Product]:
        """Return the products created by *seller_id*."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Persist a new product."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> None:
        """Atomically remove *quantity* units from a product's stock.

        The check and the write are one conditional operation: raises
        OutOfStockError (and changes nothing) if the stock at write time
        is smaller than *quantity*.
        """
