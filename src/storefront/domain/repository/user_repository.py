"""Abstract repository for User entity."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import CartItem, User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Persist a new user."""

    @abstractmethod
    def save_cart(self, user_id: str, cart: list[CartItem]) -> None:
        """Replace the stored cart of an existing user."""

    @abstractmethod
    def clear_cart(self, user_id: str) -> None:
        """Empty the user's cart. Unknown users are ignored."""
