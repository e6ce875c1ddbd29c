"""User entity, as far as orders and the cart need it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Quantity


class Role(Enum):
    USER = "user"
    SELLER = "seller"
    ADMIN = "admin"


@dataclass
class CartItem:
    product_id: str
    quantity: int


@dataclass
class User:
    id: str
    username: str
    email: str
    password: str  # hash; never leaves the store through a projection
    role: Role = Role.USER
    cart: list[CartItem] = field(default_factory=list)

    # --- Cart -----------------------------------------------------------------

    def add_to_cart(self, product_id: str, quantity: Quantity) -> None:
        """Add *quantity* units; a product already in the cart accumulates."""
        item = self._cart_item(product_id)
        if item is None:
            self.cart.append(CartItem(product_id, quantity.value))
        else:
            item.quantity += quantity.value

    def update_cart_item(self, product_id: str, quantity: Quantity) -> None:
        item = self._cart_item(product_id)
        if item is None:
            raise EntityNotFoundError("Item not in cart")
        item.quantity = quantity.value

    def remove_from_cart(self, product_id: str) -> None:
        """Drop the product from the cart. Absent products are ignored."""
        self.cart = [item for item in self.cart if item.product_id != product_id]

    def clear_cart(self) -> None:
        self.cart = []

    def _cart_item(self, product_id: str) -> CartItem | None:
        for item in self.cart:
            if item.product_id == product_id:
                return item
        return None

    def summary(self) -> UserSummary:
        return UserSummary(
            id=self.id,
            username=self.username,
            email=self.email,
            role=self.role.value,
        )


@dataclass(frozen=True)
class UserSummary:
    """Public projection of a user: no password, no cart."""

    id: str
    username: str
    email: str
    role: str
