"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the API/CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

from storefront.domain.model.order import Order, SellerOrder
from storefront.domain.model.product import Product, ProductSummary
from storefront.domain.model.user import CartItem, UserSummary


# --- Input --------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line the customer asked for.

    ``price`` is the unit price the client saw; when omitted the catalog
    price is used.
    """

    product_id: Any
    quantity: Any
    price: Any = None
    variant: str | None = None


@dataclass(frozen=True)
class PlaceOrderRequest:
    """Input: an order as submitted, before any validation.

    Fields are deliberately loose (``None`` means "absent") so the handler
    can report every missing field at once.
    """

    order_items: list[OrderItemSpec] | None = None
    shipping_address: dict | None = None
    payment_method: Any = None
    items_price: Any = None
    tax_price: Any = None
    shipping_price: Any = None


# --- Output -------------------------------------------------------------------


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    name: str
    quantity: int
    price: Decimal
    image: str
    variant: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order."""

    id: str
    order_number: str
    user_id: str
    items: list[OrderLineItemDTO]
    shipping_address: dict
    payment_method: str
    payment_result: dict | None
    items_price: Decimal
    tax_price: Decimal
    shipping_price: Decimal
    total_price: Decimal
    status: str
    is_paid: bool
    paid_at: datetime | None
    is_delivered: bool
    delivered_at: datetime | None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PlacedOrderDTO:
    order: OrderDTO
    order_number: str


@dataclass(frozen=True)
class ProductSummaryDTO:
    id: str
    name: str
    price: Decimal
    images: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class UserSummaryDTO:
    id: str
    username: str
    email: str
    role: str


@dataclass(frozen=True)
class SellerOrderDTO:
    order: OrderDTO
    buyer: UserSummaryDTO | None
    products: list[ProductSummaryDTO]


@dataclass(frozen=True)
class CartItemDTO:
    product_id: str
    quantity: int
    product: ProductSummaryDTO | None  # None once the product left the catalog


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartItemDTO]


# --- Mapping ------------------------------------------------------------------


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,  # type: ignore[arg-type]
        user_id=order.user_id,
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                name=item.name,
                quantity=item.quantity.value,
                price=item.unit_price.amount,
                image=item.image,
                variant=item.variant,
            )
            for item in order.items
        ],
        shipping_address=order.shipping_address.to_dict(),
        payment_method=order.payment_method.value,
        payment_result=(
            order.payment_result.to_dict() if order.payment_result else None
        ),
        items_price=order.items_price.amount,
        tax_price=order.tax_price.amount,
        shipping_price=order.shipping_price.amount,
        total_price=order.total_price.amount,
        status=order.status.value,
        is_paid=order.is_paid,
        paid_at=order.paid_at,
        is_delivered=order.is_delivered,
        delivered_at=order.delivered_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _product_to_dto(product: ProductSummary) -> ProductSummaryDTO:
    return ProductSummaryDTO(
        id=product.id,
        name=product.name,
        price=product.price.amount,
        images=list(product.images),
    )


def _user_to_dto(user: UserSummary) -> UserSummaryDTO:
    return UserSummaryDTO(
        id=user.id, username=user.username, email=user.email, role=user.role
    )


def seller_order_to_dto(view: SellerOrder) -> SellerOrderDTO:
    return SellerOrderDTO(
        order=order_to_dto(view.order),
        buyer=_user_to_dto(view.buyer) if view.buyer else None,
        products=[_product_to_dto(p) for p in view.products],
    )


def cart_to_dto(user_id: str, cart: list[CartItem], products: list[Product]) -> CartDTO:
    by_id = {p.id: p for p in products}
    return CartDTO(
        user_id=user_id,
        items=[
            CartItemDTO(
                product_id=item.product_id,
                quantity=item.quantity,
                product=(
                    _product_to_dto(ProductSummary.of(by_id[item.product_id]))
                    if item.product_id in by_id
                    else None
                ),
            )
            for item in cart
        ],
    )
