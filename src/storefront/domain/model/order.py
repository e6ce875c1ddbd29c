"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items. Line items and
prices are frozen when the order is created; afterwards the only way to
change an order is through its status transitions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import InvalidTransitionError, ValidationError
from storefront.domain.model.product import ProductSummary
from storefront.domain.model.user import UserSummary
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"
    REFUNDED = "Refunded"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def order_number_for(order_id: str) -> str:
    """``64f1a2b3c4d5...`` -> ``ORD-64F1A2B3``."""
    return f"ORD-{order_id[:8].upper()}"


@dataclass(frozen=True)
class OrderLineItem:
    """Snapshot of one product at order-creation time.

    Later edits to the product (name, price, images) never reach an
    existing order.
    """

    product_id: str
    name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    image: str = ""
    variant: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str | None
    user_id: str
    items: list[OrderLineItem]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    items_price: Money
    tax_price: Money
    shipping_price: Money
    total_price: Money
    status: OrderStatus = OrderStatus.PENDING
    is_paid: bool = False
    paid_at: datetime | None = None
    is_delivered: bool = False
    delivered_at: datetime | None = None
    payment_result: PaymentResult | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: str,
        items: list[OrderLineItem],
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        items_price: Money,
        tax_price: Money | None = None,
        shipping_price: Money | None = None,
        now: datetime | None = None,
    ) -> Order:
        """Create a new pending order, enforcing all invariants.

        ``total_price`` is computed here once and stored; it is never
        recomputed from the line items afterwards.
        """
        if not user_id:
            raise ValidationError("Order must belong to a user")
        if not items:
            raise ValidationError("Order must contain at least one item")

        tax_price = tax_price or Money.zero()
        shipping_price = shipping_price or Money.zero()
        now = now or _utcnow()

        is_paid = not payment_method.settles_on_delivery
        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            shipping_address=shipping_address,
            payment_method=payment_method,
            items_price=items_price,
            tax_price=tax_price,
            shipping_price=shipping_price,
            total_price=items_price + tax_price + shipping_price,
            status=OrderStatus.PENDING,
            is_paid=is_paid,
            paid_at=now if is_paid else None,
            is_delivered=False,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def mark_paid(
        self,
        payment_result: PaymentResult | None,
        now: datetime | None = None,
    ) -> None:
        """Transition PENDING -> PROCESSING and record the payment.

        A DELIVERED order that was not paid yet (cash on delivery) records
        the payment but keeps its status.
        """
        now = now or _utcnow()
        if self.status == OrderStatus.PENDING:
            self.status = OrderStatus.PROCESSING
        elif not (self.status == OrderStatus.DELIVERED and not self.is_paid):
            raise InvalidTransitionError(
                f"Cannot mark order paid — current status is {self.status.value}"
            )
        self.is_paid = True
        self.paid_at = now
        self.payment_result = payment_result
        self.updated_at = now

    def mark_delivered(self, now: datetime | None = None) -> None:
        """Transition PENDING|PROCESSING|SHIPPED -> DELIVERED."""
        if self.status not in (
            OrderStatus.PENDING,
            OrderStatus.PROCESSING,
            OrderStatus.SHIPPED,
        ):
            raise InvalidTransitionError(
                f"Cannot mark order delivered — current status is {self.status.value}"
            )
        now = now or _utcnow()
        self.status = OrderStatus.DELIVERED
        self.is_delivered = True
        self.delivered_at = now
        self.updated_at = now

    # --- Computed properties --------------------------------------------------

    @property
    def order_number(self) -> str | None:
        if self.id is None:
            return None
        return order_number_for(self.id)

    @property
    def product_ids(self) -> list[str]:
        return [item.product_id for item in self.items]


@dataclass(frozen=True)
class SellerOrder:
    """Read-only projection of an order for one seller.

    ``order.items`` only holds the line items of the seller's products.
    """

    order: Order
    buyer: UserSummary | None
    products: list[ProductSummary]
