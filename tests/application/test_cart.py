"""Integration tests for the cart use cases.

Uses the in-memory fake store — no file I/O.
"""

from decimal import Decimal

import pytest

from storefront.application.cart import (
    AddToCartHandler,
    ClearCartHandler,
    GetCartHandler,
    RemoveFromCartHandler,
    UpdateCartItemHandler,
)
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.user import CartItem, User
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeStore, uow_factory

LAPTOP = "64f1a2b3c4d5e6f7a8b9c0d1"
MOUSE = "64f1a2b3c4d5e6f7a8b9c0d2"
GONE = "64f1a2b3c4d5e6f7a8b9c0ff"


def _setup(*cart: CartItem) -> FakeStore:
    """A laptop and a mouse in the catalog; user u1 holding *cart*."""
    return FakeStore.with_data(
        products=[
            Product(LAPTOP, "Laptop", Money.of("1000.00"), 5, ["/img/laptop.png"], created_by="s1"),
            Product(MOUSE, "Mouse", Money.of("25.00"), 10, created_by="s2"),
        ],
        users=[User("u1", "alice", "alice@example.com", "hash", cart=list(cart))],
    )


class TestGetCart:

    def test_joins_catalog_entries(self):
        store = _setup(CartItem(LAPTOP, 2))

        cart = GetCartHandler(uow_factory(store)).handle("u1")

        assert cart.user_id == "u1"
        assert len(cart.items) == 1
        item = cart.items[0]
        assert (item.product_id, item.quantity) == (LAPTOP, 2)
        assert item.product.name == "Laptop"
        assert item.product.price == Decimal("1000.00")
        assert item.product.images == ["/img/laptop.png"]

    def test_delisted_product_kept_without_details(self):
        store = _setup(CartItem(GONE, 1))
        cart = GetCartHandler(uow_factory(store)).handle("u1")
        assert cart.items[0].product_id == GONE
        assert cart.items[0].product is None

    def test_unknown_user_has_empty_cart(self):
        store = _setup()
        cart = GetCartHandler(uow_factory(store)).handle("nobody")
        assert cart.items == []
        assert store.commits == 0


class TestAddToCart:

    def test_adds_one_unit_by_default(self):
        store = _setup()

        cart = AddToCartHandler(uow_factory(store)).handle("u1", MOUSE)

        assert [(i.product_id, i.quantity) for i in cart.items] == [(MOUSE, 1)]
        assert store.users["u1"].cart == [CartItem(MOUSE, 1)]
        assert store.commits == 1

    def test_existing_item_accumulates(self):
        store = _setup(CartItem(LAPTOP, 2))
        AddToCartHandler(uow_factory(store)).handle("u1", LAPTOP, 3)
        assert store.users["u1"].cart == [CartItem(LAPTOP, 5)]

    def test_upper_case_id_matches_catalog(self):
        store = _setup(CartItem(LAPTOP, 2))
        AddToCartHandler(uow_factory(store)).handle("u1", LAPTOP.upper(), 1)
        assert store.users["u1"].cart == [CartItem(LAPTOP, 3)]

    def test_unknown_product_rejected(self):
        store = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            AddToCartHandler(uow_factory(store)).handle("u1", GONE, 1)
        assert store.users["u1"].cart == []
        assert store.commits == 0

    def test_unknown_user_rejected(self):
        store = _setup()
        with pytest.raises(EntityNotFoundError, match="User not found"):
            AddToCartHandler(uow_factory(store)).handle("nobody", LAPTOP, 1)

    @pytest.mark.parametrize("product_id", [None, "", "   ", 42])
    def test_bad_product_id(self, product_id):
        store = _setup()
        with pytest.raises(ValidationError, match="Invalid productId"):
            AddToCartHandler(uow_factory(store)).handle("u1", product_id, 1)

    @pytest.mark.parametrize("quantity", [0, -2, "2", 1.5])
    def test_bad_quantity(self, quantity):
        store = _setup()
        with pytest.raises(ValidationError):
            AddToCartHandler(uow_factory(store)).handle("u1", LAPTOP, quantity)
        assert store.users["u1"].cart == []


class TestUpdateCartItem:

    def test_sets_quantity(self):
        store = _setup(CartItem(LAPTOP, 2), CartItem(MOUSE, 1))

        cart = UpdateCartItemHandler(uow_factory(store)).handle("u1", MOUSE, 4)

        assert [(i.product_id, i.quantity) for i in cart.items] == [(LAPTOP, 2), (MOUSE, 4)]
        assert store.users["u1"].cart[1] == CartItem(MOUSE, 4)

    def test_item_not_in_cart(self):
        store = _setup(CartItem(LAPTOP, 2))
        with pytest.raises(EntityNotFoundError, match="Item not in cart"):
            UpdateCartItemHandler(uow_factory(store)).handle("u1", MOUSE, 4)
        assert store.rollbacks == 1

    def test_missing_quantity(self):
        store = _setup(CartItem(LAPTOP, 2))
        with pytest.raises(ValidationError):
            UpdateCartItemHandler(uow_factory(store)).handle("u1", LAPTOP, None)
        assert store.users["u1"].cart == [CartItem(LAPTOP, 2)]


class TestRemoveAndClear:

    def test_remove(self):
        store = _setup(CartItem(LAPTOP, 2), CartItem(MOUSE, 1))

        cart = RemoveFromCartHandler(uow_factory(store)).handle("u1", LAPTOP)

        assert [i.product_id for i in cart.items] == [MOUSE]
        assert store.users["u1"].cart == [CartItem(MOUSE, 1)]

    def test_remove_absent_item_keeps_cart(self):
        store = _setup(CartItem(LAPTOP, 2))
        cart = RemoveFromCartHandler(uow_factory(store)).handle("u1", MOUSE)
        assert [i.product_id for i in cart.items] == [LAPTOP]

    def test_clear(self):
        store = _setup(CartItem(LAPTOP, 2), CartItem(MOUSE, 1))

        cart = ClearCartHandler(uow_factory(store)).handle("u1")

        assert cart.items == []
        assert store.users["u1"].cart == []

    def test_clear_unknown_user(self):
        store = _setup()
        with pytest.raises(EntityNotFoundError, match="User not found"):
            ClearCartHandler(uow_factory(store)).handle("nobody")
