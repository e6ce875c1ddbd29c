"""Application services: the shopping cart of a user.

The cart is stored on the user document. Every mutation loads the user,
applies the change on the entity and writes the cart back, all in one unit
of work. Handlers return the cart joined with the current catalog entries.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Quantity, normalize_id
from storefront.domain.repository.unit_of_work import UnitOfWork

log = logging.getLogger(__name__)


def _product_id(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise ValidationError("Invalid productId")
    return normalize_id(raw)


def _load_user(uow: UnitOfWork, user_id: str) -> User:
    user = uow.users.get_by_id(user_id)
    if user is None:
        raise EntityNotFoundError("User not found")
    return user


def _render(uow: UnitOfWork, user: User) -> CartDTO:
    products = uow.products.get_many([item.product_id for item in user.cart])
    return cart_to_dto(user.id, user.cart, products)


class GetCartHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str) -> CartDTO:
        """Return the user's cart; an unknown user has an empty one."""
        with self._unit_of_work() as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                return CartDTO(user_id=user_id, items=[])
            return _render(uow, user)


class AddToCartHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str, product_id: Any, quantity: Any = None) -> CartDTO:
        """Add a product to the cart, one unit unless *quantity* says otherwise.

        Raises:
            ValidationError: bad product id or quantity.
            EntityNotFoundError: unknown user or product.
        """
        product_id = _product_id(product_id)
        amount = Quantity(1 if quantity is None else quantity)

        with self._unit_of_work() as uow:
            user = _load_user(uow, user_id)
            if uow.products.get_by_id(product_id) is None:
                raise EntityNotFoundError("Product not found")
            user.add_to_cart(product_id, amount)
            uow.users.save_cart(user.id, user.cart)
            cart = _render(uow, user)
            uow.commit()
        log.info(f"[User: {user_id}] Added {amount} x {product_id} to cart")
        return cart


class UpdateCartItemHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str, product_id: Any, quantity: Any) -> CartDTO:
        """Set the quantity of a product already in the cart."""
        product_id = _product_id(product_id)
        amount = Quantity(quantity)

        with self._unit_of_work() as uow:
            user = _load_user(uow, user_id)
            user.update_cart_item(product_id, amount)
            uow.users.save_cart(user.id, user.cart)
            cart = _render(uow, user)
            uow.commit()
        return cart


class RemoveFromCartHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str, product_id: Any) -> CartDTO:
        product_id = _product_id(product_id)

        with self._unit_of_work() as uow:
            user = _load_user(uow, user_id)
            user.remove_from_cart(product_id)
            uow.users.save_cart(user.id, user.cart)
            cart = _render(uow, user)
            uow.commit()
        return cart


class ClearCartHandler:

    def __init__(self, unit_of_work: Callable[[], UnitOfWork]) -> None:
        self._unit_of_work = unit_of_work

    def handle(self, user_id: str) -> CartDTO:
        with self._unit_of_work() as uow:
            user = _load_user(uow, user_id)
            user.clear_cart()
            uow.users.save_cart(user.id, user.cart)
            uow.commit()
        log.info(f"[User: {user_id}] Cart cleared")
        return CartDTO(user_id=user_id, items=[])
