"""Integration tests for the read-side use cases: user orders, seller orders, single order."""

from datetime import datetime, timedelta, timezone

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.list_orders import ListSellerOrdersHandler, ListUserOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.product import Product
from storefront.domain.model.user import Role, User
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    Quantity,
    ShippingAddress,
)
from tests.fakes import FakeStore, uow_factory

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _order(oid: str, user_id: str, product_ids: list[str], days: int) -> Order:
    order = Order.create(
        user_id=user_id,
        items=[
            OrderLineItem(pid, f"Product {pid}", Quantity(2), Money.of("10"))
            for pid in product_ids
        ],
        shipping_address=ShippingAddress("1 Main", "X", "Y", "1", "Z"),
        payment_method=PaymentMethod.STRIPE,
        items_price=Money.of("20") * len(product_ids),
        now=T0 + timedelta(days=days),
    )
    order.id = oid
    return order


def _setup() -> FakeStore:
    return FakeStore.with_data(
        products=[
            Product("a", "Product a", Money.of("10"), 5, ["/a.png"], created_by="s1"),
            Product("b", "Product b", Money.of("10"), 5, created_by="s2"),
        ],
        users=[
            User("u1", "alice", "alice@example.com", "hash"),
            User("u2", "bob", "bob@example.com", "hash"),
            User("s1", "sam", "sam@example.com", "hash", role=Role.SELLER),
        ],
        orders=[
            _order("o1", "u1", ["a"], days=0),
            _order("o2", "u1", ["b"], days=2),
            _order("o3", "u2", ["a", "b"], days=1),
        ],
    )


class TestListUserOrders:

    def test_own_orders_newest_first(self):
        dtos = ListUserOrdersHandler(uow_factory(_setup())).handle("u1")
        assert [d.id for d in dtos] == ["o2", "o1"]

    def test_no_orders(self):
        assert ListUserOrdersHandler(uow_factory(_setup())).handle("nobody") == []


class TestListSellerOrders:

    def test_restricted_to_seller_items(self):
        views = ListSellerOrdersHandler(uow_factory(_setup())).handle("s1")

        assert [v.order.id for v in views] == ["o3", "o1"]
        assert [i.product_id for i in views[0].order.items] == ["a"]
        assert views[0].buyer.username == "bob"
        assert views[0].products[0].images == ["/a.png"]

    def test_seller_without_products(self):
        assert ListSellerOrdersHandler(uow_factory(_setup())).handle("u1") == []

    def test_order_totals_are_not_recomputed(self):
        views = ListSellerOrdersHandler(uow_factory(_setup())).handle("s1")
        assert str(views[0].order.total_price) == "40"


class TestShowOrder:

    def test_found(self):
        dto = ShowOrderHandler(uow_factory(_setup())).handle("o3")
        assert dto.order_number == "ORD-O3"
        assert len(dto.items) == 2

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow_factory(_setup())).handle("missing")


class TestAddProduct:

    def test_adds_product(self):
        store = FakeStore()
        product = AddProductHandler(uow_factory(store)).handle(
            name=" Laptop ", price="999.99", stock=4, seller_id="s1", images=["/l.png"]
        )
        assert store.products[product.id].name == "Laptop"
        assert store.products[product.id].price == Money.of("999.99")
        assert store.products[product.id].created_by == "s1"
        assert len(product.id) == 24

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            AddProductHandler(uow_factory(FakeStore())).handle("Laptop", "1", -1)

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name"):
            AddProductHandler(uow_factory(FakeStore())).handle("  ", "1", 1)
