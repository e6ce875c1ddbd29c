"""Document mapping shared by the JSON and MongoDB stores.

Amounts are stored as decimal strings so no precision is lost; reading
also accepts plain numbers written by other tools. Timestamps are kept as
``datetime`` objects here; the JSON store encodes them as ISO-8601.
"""

from __future__ import annotations

from datetime import datetime, timezone

from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.user import CartItem, Role, User
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)


def _doc_id(doc: dict) -> str:
    return str(doc["id"] if "id" in doc else doc["_id"])


def _as_datetime(value) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


# --- Product ------------------------------------------------------------------


def product_to_document(product: Product) -> dict:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description,
        "price": str(product.price.amount),
        "stock": product.stock,
        "images": list(product.images),
        "created_by": product.created_by,
    }


def product_from_document(doc: dict) -> Product:
    images = doc.get("images") or []
    if isinstance(images, str):
        images = [images]
    created_by = doc.get("created_by")
    return Product(
        id=_doc_id(doc),
        name=doc["name"],
        description=doc.get("description", ""),
        price=Money.of(doc["price"]),
        stock=int(doc.get("stock", 0)),
        images=list(images),
        created_by=str(created_by) if created_by is not None else None,
    )


# --- User ---------------------------------------------------------------------


def cart_to_document(cart: list[CartItem]) -> list[dict]:
    return [{"product_id": item.product_id, "quantity": item.quantity} for item in cart]


def user_to_document(user: User) -> dict:
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "password": user.password,
        "role": user.role.value,
        "cart": cart_to_document(user.cart),
    }


def user_from_document(doc: dict) -> User:
    return User(
        id=_doc_id(doc),
        username=doc.get("username", ""),
        email=doc.get("email", ""),
        password=doc.get("password", ""),
        role=Role(doc.get("role", Role.USER.value)),
        cart=[
            CartItem(product_id=str(c["product_id"]), quantity=int(c["quantity"]))
            for c in doc.get("cart", [])
        ],
    )


# --- Order --------------------------------------------------------------------


def order_to_document(order: Order) -> dict:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "items": [
            {
                "product_id": item.product_id,
                "name": item.name,
                "quantity": item.quantity.value,
                "unit_price": str(item.unit_price.amount),
                "image": item.image,
                "variant": item.variant,
            }
            for item in order.items
        ],
        "shipping_address": order.shipping_address.to_dict(),
        "payment_method": order.payment_method.value,
        "payment_result": (
            order.payment_result.to_dict() if order.payment_result else None
        ),
        "items_price": str(order.items_price.amount),
        "tax_price": str(order.tax_price.amount),
        "shipping_price": str(order.shipping_price.amount),
        "total_price": str(order.total_price.amount),
        "status": order.status.value,
        "is_paid": order.is_paid,
        "paid_at": order.paid_at,
        "is_delivered": order.is_delivered,
        "delivered_at": order.delivered_at,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def order_from_document(doc: dict) -> Order:
    items = [
        OrderLineItem(
            product_id=str(i["product_id"]),
            name=i["name"],
            quantity=Quantity(int(i["quantity"])),
            unit_price=Money.of(i["unit_price"]),
            image=i.get("image", ""),
            variant=i.get("variant", ""),
        )
        for i in doc["items"]
    ]
    return Order(
        id=_doc_id(doc),
        user_id=str(doc["user_id"]),
        items=items,
        shipping_address=ShippingAddress.from_dict(doc["shipping_address"]),
        payment_method=PaymentMethod(doc["payment_method"]),
        items_price=Money.of(doc["items_price"]),
        tax_price=Money.of(doc.get("tax_price", 0)),
        shipping_price=Money.of(doc.get("shipping_price", 0)),
        total_price=Money.of(doc["total_price"]),
        status=OrderStatus(doc["status"]),
        is_paid=bool(doc.get("is_paid", False)),
        paid_at=_as_datetime(doc.get("paid_at")),
        is_delivered=bool(doc.get("is_delivered", False)),
        delivered_at=_as_datetime(doc.get("delivered_at")),
        payment_result=PaymentResult.from_dict(doc.get("payment_result")),
        created_at=_as_datetime(doc["created_at"]),  # type: ignore[arg-type]
        updated_at=_as_datetime(doc.get("updated_at", doc["created_at"])),  # type: ignore[arg-type]
    )
