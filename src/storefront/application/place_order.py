"""Application service: Place Order use case.

Orchestrates request validation, the catalog lookup, the stock
reservation domain service and the Order aggregate. Everything from the
catalog lookup to the order insert runs inside one unit of work: either
the stock decrements and the order row are committed together, or
nothing is.

Clearing the customer's cart happens afterwards, outside the unit of
work. It is best-effort and never turns a placed order into a failure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from storefront.application.dto import (
    OrderItemSpec,
    PlacedOrderDTO,
    PlaceOrderRequest,
    order_to_dto,
)
from storefront.domain.exceptions import (
    MissingFieldsError,
    ProductsNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    Quantity,
    ShippingAddress,
    normalize_id,
)
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ParsedItem:
    product_id: str
    quantity: Quantity
    price: Money | None
    variant: str


class PlaceOrderHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str, request: PlaceOrderRequest) -> PlacedOrderDTO:
        """Place a new order for *user_id*.

        Steps:
        1. Check that every required field is present (all reported at once).
        2. Validate the payment method, address, prices and quantities.
        3. In one unit of work: resolve the products, check stock for every
           line, snapshot the line items, decrement stock, insert the order.
        4. Commit, then clear the user's cart (best-effort).
        """
        self._check_required(request)

        payment_method = PaymentMethod.parse(request.payment_method)
        shipping_address = ShippingAddress.from_dict(request.shipping_address)
        items_price = Money.of(request.items_price)
        tax_price = self._optional_money(request.tax_price)
        shipping_price = self._optional_money(request.shipping_price)
        parsed = [
            self._parse_item(position, spec)
            for position, spec in enumerate(request.order_items, start=1)  # type: ignore[arg-type]
        ]

        with self._unit_of_work() as uow:
            requested_ids = list(dict.fromkeys(item.product_id for item in parsed))
            products = {p.id: p for p in uow.products.get_many(requested_ids)}

            missing = [pid for pid in requested_ids if pid not in products]
            if missing:
                raise ProductsNotFoundError(missing)

            stock = StockReservationService(uow.products)
            stock.check_availability(
                [(products[item.product_id], item.quantity.value) for item in parsed]
            )

            line_items = [
                OrderLineItem(
                    product_id=item.product_id,
                    name=products[item.product_id].name,
                    quantity=item.quantity,
                    unit_price=item.price or products[item.product_id].price,  # <-- price snapshot
                    image=products[item.product_id].primary_image,
                    variant=item.variant,
                )
                for item in parsed
            ]

            order = Order.create(
                user_id=user_id,
                items=line_items,
                shipping_address=shipping_address,
                payment_method=payment_method,
                items_price=items_price,
                tax_price=tax_price,
                shipping_price=shipping_price,
            )

            stock.reserve(order.items)
            uow.orders.add(order)
            uow.commit()

        log.info(
            f"[Order: {order.id}] Placed by user {user_id}: "
            f"{len(order.items)} line(s), total {order.total_price}"
        )

        self._clear_cart(user_id, order.id)  # type: ignore[arg-type]

        return PlacedOrderDTO(
            order=order_to_dto(order),
            order_number=order.order_number,  # type: ignore[arg-type]
        )

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def _check_required(request: PlaceOrderRequest) -> None:
        missing = {
            "orderItems": not request.order_items,
            "shippingAddress": not request.shipping_address,
            "paymentMethod": not request.payment_method,
            "itemsPrice": request.items_price is None,
        }
        if any(missing.values()):
            raise MissingFieldsError(missing)

    @staticmethod
    def _optional_money(raw) -> Money:
        return Money.zero() if raw is None else Money.of(raw)

    @staticmethod
    def _parse_item(position: int, spec: OrderItemSpec) -> _ParsedItem:
        if not isinstance(spec.product_id, str) or not spec.product_id.strip():
            raise ValidationError(f"Order item {position} has no product id")
        try:
            quantity = Quantity(spec.quantity)
        except ValidationError as exc:
            raise ValidationError(f"Order item {position}: {exc}") from exc
        return _ParsedItem(
            product_id=normalize_id(spec.product_id),
            quantity=quantity,
            price=None if spec.price is None else Money.of(spec.price),
            variant=spec.variant or "",
        )

    # --- Post-commit ----------------------------------------------------------

    def _clear_cart(self, user_id: str, order_id: str) -> None:
        try:
            with self._unit_of_work() as uow:
                uow.users.clear_cart(user_id)
                uow.commit()
        except Exception:
            log.exception(
                f"[Order: {order_id}] Order placed but clearing the cart "
                f"of user {user_id} failed"
            )
