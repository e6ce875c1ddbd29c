"""Application service: Mark Order Delivered use case."""

from __future__ import annotations

import logging
from typing import Callable

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork

log = logging.getLogger(__name__)


class MarkOrderDeliveredHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, order_id: str) -> OrderDTO:
        with self._unit_of_work() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError("Order not found")

            order.mark_delivered()
            uow.orders.save(order)
            uow.commit()

        log.info(f"[Order: {order_id}] Marked delivered")
        return order_to_dto(order)
