"""Pydantic schemas for the HTTP API (camelCase on the wire)."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from storefront.application.dto import (
    OrderItemSpec,
    PlaceOrderRequest,
    SellerOrderDTO,
)
from storefront.domain.model.value_objects import PaymentResult

# Amounts travel as JSON numbers.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Requests -----------------------------------------------------------------


class OrderItemIn(CamelModel):
    """One requested line; the product id arrives as ``product`` or ``productId``."""

    product: Any = Field(default=None, validation_alias=AliasChoices("product", "productId"))
    quantity: Any = None
    price: Any = None
    variant: Optional[str] = None


class PlaceOrderIn(CamelModel):
    # Presence is checked by the use case so that every missing field is
    # reported together; types are checked there too.
    order_items: Optional[list[OrderItemIn]] = None
    shipping_address: Optional[dict] = None
    payment_method: Any = None
    items_price: Any = None
    tax_price: Any = None
    shipping_price: Any = None

    def to_request(self) -> PlaceOrderRequest:
        return PlaceOrderRequest(
            order_items=(
                [
                    OrderItemSpec(
                        product_id=item.product,
                        quantity=item.quantity,
                        price=item.price,
                        variant=item.variant,
                    )
                    for item in self.order_items
                ]
                if self.order_items is not None
                else None
            ),
            shipping_address=self.shipping_address,
            payment_method=self.payment_method,
            items_price=self.items_price,
            tax_price=self.tax_price,
            shipping_price=self.shipping_price,
        )


class PaymentResultIn(CamelModel):
    payment_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("paymentId", "id", "payment_id"))
    status: Optional[str] = None
    update_time: Optional[str] = None
    email_address: Optional[str] = None

    def to_domain(self) -> PaymentResult:
        return PaymentResult(
            payment_id=self.payment_id,
            status=self.status,
            update_time=self.update_time,
            email_address=self.email_address,
        )


class MarkPaidIn(CamelModel):
    payment_result: Optional[PaymentResultIn] = None


class AddToCartIn(CamelModel):
    product_id: Any = None
    quantity: Any = None


class UpdateCartItemIn(CamelModel):
    quantity: Any = None


# --- Responses ----------------------------------------------------------------


class ShippingAddressOut(CamelModel):
    street: str
    city: str
    state: str
    zip: str
    country: str


class PaymentResultOut(CamelModel):
    payment_id: Optional[str] = None
    status: Optional[str] = None
    update_time: Optional[str] = None
    email_address: Optional[str] = None


class OrderItemOut(CamelModel):
    product_id: str
    name: str
    quantity: int
    price: Amount
    image: str
    variant: str


class OrderOut(CamelModel):
    id: str
    order_number: str
    user_id: str
    items: list[OrderItemOut]
    shipping_address: ShippingAddressOut
    payment_method: str
    payment_result: Optional[PaymentResultOut] = None
    items_price: Amount
    tax_price: Amount
    shipping_price: Amount
    total_price: Amount
    status: str
    is_paid: bool
    paid_at: Optional[datetime] = None
    is_delivered: bool
    delivered_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class UserOut(CamelModel):
    id: str
    username: str
    email: str
    role: str


class ProductOut(CamelModel):
    id: str
    name: str
    price: Amount
    images: list[str]


class SellerOrderOut(OrderOut):
    user: Optional[UserOut] = None
    product_details: list[ProductOut]

    @staticmethod
    def from_dto(dto: SellerOrderDTO) -> SellerOrderOut:
        order = OrderOut.model_validate(dto.order)
        return SellerOrderOut(
            **order.model_dump(),
            user=UserOut.model_validate(dto.buyer) if dto.buyer else None,
            product_details=[ProductOut.model_validate(p) for p in dto.products],
        )


class OrderEnvelope(CamelModel):
    success: bool = True
    data: OrderOut


class PlacedOrderEnvelope(CamelModel):
    success: bool = True
    message: str = "Order placed successfully"
    data: OrderOut
    order_number: str


class OrderListEnvelope(CamelModel):
    success: bool = True
    data: list[OrderOut]


class SellerOrderListEnvelope(CamelModel):
    success: bool = True
    message: str
    data: list[SellerOrderOut]


class CartItemOut(CamelModel):
    product_id: str
    quantity: int
    product: Optional[ProductOut] = None


class CartOut(CamelModel):
    user_id: str
    items: list[CartItemOut]


class CartEnvelope(CamelModel):
    success: bool = True
    data: CartOut
