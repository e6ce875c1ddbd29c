"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order, SellerOrder


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique order ID (24 hex characters)."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order, assigning its ID if unset.

        Raises ConflictError if an order with the same ID already exists.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist an updated order."""

    @abstractmethod
    def list_by_user(self, user_id: str) -> list[Order]:
        """Return the user's orders, newest first."""

    @abstractmethod
    def find_orders_containing_seller_products(self, seller_id: str) -> list[SellerOrder]:
        """Return orders with at least one line item of the seller's products.

        Each result keeps only the seller's line items, carries the buyer's
        public summary and the matching product summaries, newest first.
        A seller without products gets an empty list.
        """
