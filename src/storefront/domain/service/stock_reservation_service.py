"""Domain service: Stock Reservation.

Coordinates the cross-aggregate part of placing an order: checking the
requested quantities against product stock and decrementing it.

The two-phase approach (validate-then-mutate) reports *every* shortfall
at once and never starts decrementing when one product fails validation.
The conditional decrement in phase 2 is the guard against concurrent
orders that passed phase 1 against the same stock.
"""

from __future__ import annotations

from storefront.domain.exceptions import OutOfStockError, OutOfStockItem
from storefront.domain.model.order import OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    @staticmethod
    def check_availability(
        requested: list[tuple[Product, int]],
    ) -> None:
        """Phase 1: raise OutOfStockError listing every line that cannot be served.

        Quantities of repeated products accumulate, so two lines of 3 units
        against a stock of 5 fail on the second line.
        """
        claimed: dict[str, int] = {}
        shortfalls: list[OutOfStockItem] = []

        for product, quantity in requested:
            running = claimed.get(product.id, 0) + quantity
            claimed[product.id] = running
            if not product.has_stock_for(running):
                shortfalls.append(
                    OutOfStockItem(
                        product_id=product.id,
                        name=product.name,
                        available_stock=product.stock,
                        requested_quantity=quantity,
                    )
                )

        if shortfalls:
            raise OutOfStockError(shortfalls)

    def reserve(self, items: list[OrderLineItem]) -> None:
        """Phase 2: decrement stock for every line item."""
        for item in items:
            self._product_repo.decrement_stock(item.product_id, item.quantity.value)
