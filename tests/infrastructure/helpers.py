"""Seed data and token helpers for the store, API and CLI tests."""

import jwt

from storefront.domain.model.product import Product
from storefront.domain.model.user import CartItem, Role, User
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_store import JsonDocumentStore

SECRET = "test-secret"

LAPTOP = "64f1a2b3c4d5e6f7a8b9c0d1"
MOUSE = "64f1a2b3c4d5e6f7a8b9c0d2"

ADDRESS = {
    "street": "1 Main St",
    "city": "Springfield",
    "state": "IL",
    "zip": "62701",
    "country": "US",
}


def seed(store: JsonDocumentStore) -> None:
    """Laptop (5 in stock, seller s1), mouse (10, seller s2), buyer u1, seller s1."""
    with store.unit_of_work() as uow:
        uow.products.add(
            Product(
                id=LAPTOP,
                name="Laptop",
                price=Money.of("1000.00"),
                stock=5,
                images=["/img/laptop.png"],
                created_by="s1",
            )
        )
        uow.products.add(
            Product(id=MOUSE, name="Mouse", price=Money.of("25.00"), stock=10, created_by="s2")
        )
        uow.users.add(
            User("u1", "alice", "alice@example.com", "hash", cart=[CartItem(LAPTOP, 2)])
        )
        uow.users.add(User("s1", "sam", "sam@example.com", "hash", role=Role.SELLER))
        uow.commit()


def token_for(user_id: str, role: str = "user", secret: str = SECRET) -> str:
    return jwt.encode({"id": user_id, "role": role}, secret, algorithm="HS256")


def auth(user_id: str, role: str = "user", bearer: bool = True) -> dict:
    token = token_for(user_id, role)
    return {"Authorization": f"Bearer {token}" if bearer else token}
