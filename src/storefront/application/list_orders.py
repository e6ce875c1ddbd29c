"""Application services: order read views (queries)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import (
    OrderDTO,
    SellerOrderDTO,
    order_to_dto,
    seller_order_to_dto,
)
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListUserOrdersHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str) -> list[OrderDTO]:
        """Return the user's orders, newest first."""
        with self._unit_of_work() as uow:
            orders = uow.orders.list_by_user(user_id)
        return [order_to_dto(order) for order in orders]


class ListSellerOrdersHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, seller_id: str) -> list[SellerOrderDTO]:
        """Return orders containing the seller's products, newest first.

        Only the seller's own line items are included in each order.
        """
        with self._unit_of_work() as uow:
            views = uow.orders.find_orders_containing_seller_products(seller_id)
        return [seller_order_to_dto(view) for view in views]
