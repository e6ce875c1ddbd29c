"""Integration tests for the MarkOrderPaid and MarkOrderDelivered use cases."""

from datetime import datetime, timezone

import pytest

from storefront.application.mark_order_delivered import MarkOrderDeliveredHandler
from storefront.application.mark_order_paid import MarkOrderPaidHandler
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransitionError
from storefront.domain.model.order import Order, OrderLineItem, OrderStatus
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
)
from tests.fakes import FakeStore, uow_factory

ORDER_ID = "65a0c0ffee0000000000beef"


def _setup(
    method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY,
    status: OrderStatus = OrderStatus.PENDING,
) -> tuple[MarkOrderPaidHandler, MarkOrderDeliveredHandler, FakeStore]:
    order = Order.create(
        user_id="u1",
        items=[OrderLineItem("p1", "Laptop", Quantity(1), Money.of("1000"))],
        shipping_address=ShippingAddress("1 Main", "X", "Y", "1", "Z"),
        payment_method=method,
        items_price=Money.of("1000"),
        now=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    order.id = ORDER_ID
    order.status = status
    store = FakeStore.with_data(orders=[order])
    factory = uow_factory(store)
    return MarkOrderPaidHandler(factory), MarkOrderDeliveredHandler(factory), store


class TestMarkOrderPaid:

    def test_pending_becomes_processing(self):
        pay, _, store = _setup()

        dto = pay.handle(ORDER_ID, PaymentResult(payment_id="PAY-9", status="COMPLETED"))

        assert dto.status == "Processing"
        assert dto.is_paid is True
        assert dto.paid_at is not None
        assert dto.payment_result["payment_id"] == "PAY-9"
        assert store.orders[ORDER_ID].status == OrderStatus.PROCESSING
        assert store.commits == 1

    def test_without_payment_result(self):
        pay, _, _ = _setup()
        dto = pay.handle(ORDER_ID, None)
        assert dto.payment_result is None
        assert dto.is_paid is True

    def test_unknown_order(self):
        pay, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Order not found"):
            pay.handle("000000000000000000000000", None)

    def test_already_processing_rejected_without_change(self):
        pay, _, store = _setup(method=PaymentMethod.PAYPAL, status=OrderStatus.PROCESSING)
        before = store.orders[ORDER_ID].updated_at

        with pytest.raises(InvalidTransitionError):
            pay.handle(ORDER_ID, None)

        assert store.orders[ORDER_ID].updated_at == before
        assert store.rollbacks == 1

    def test_updated_at_moves_forward(self):
        pay, _, store = _setup()
        created = store.orders[ORDER_ID].created_at
        dto = pay.handle(ORDER_ID, None)
        assert dto.updated_at > created


class TestMarkOrderDelivered:

    def test_pending_becomes_delivered(self):
        _, deliver, store = _setup()

        dto = deliver.handle(ORDER_ID)

        assert dto.status == "Delivered"
        assert dto.is_delivered is True
        assert dto.delivered_at is not None
        assert store.orders[ORDER_ID].is_delivered is True

    def test_cash_order_stays_unpaid_then_can_be_paid(self):
        pay, deliver, _ = _setup()

        delivered = deliver.handle(ORDER_ID)
        assert delivered.is_paid is False

        paid = pay.handle(ORDER_ID, None)
        assert paid.status == "Delivered"
        assert paid.is_paid is True

    def test_second_delivery_rejected(self):
        _, deliver, _ = _setup()
        deliver.handle(ORDER_ID)
        with pytest.raises(InvalidTransitionError, match="Delivered"):
            deliver.handle(ORDER_ID)

    def test_cancelled_order_rejected(self):
        _, deliver, store = _setup(status=OrderStatus.CANCELLED)
        with pytest.raises(InvalidTransitionError):
            deliver.handle(ORDER_ID)
        assert store.orders[ORDER_ID].status == OrderStatus.CANCELLED

    def test_unknown_order(self):
        _, deliver, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            deliver.handle("nope")
