"""JSON-file-backed document store.

All collections live in one file::

    {"products": [...], "orders": [...], "users": [...]}

A unit of work holds the store lock for its whole lifetime and works on a
private copy of the document. Commit writes the full document to a
temporary file and renames it over the original, so a crash can never
leave half a transaction on disk. Isolation is per process; run several
server processes against the MongoDB store instead.
"""

from __future__ import annotations

import json
import logging
import os
import secrets
import tempfile
import threading
from datetime import datetime
from pathlib import Path

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    OutOfStockError,
    OutOfStockItem,
)
from storefront.domain.model.order import Order, SellerOrder
from storefront.domain.model.product import Product
from storefront.domain.model.user import CartItem, User
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.repository.user_repository import UserRepository
from storefront.domain.service.seller_orders import project_seller_orders
from storefront.infrastructure.persistence.documents import (
    cart_to_document,
    order_from_document,
    order_to_document,
    product_from_document,
    product_to_document,
    user_from_document,
    user_to_document,
)

log = logging.getLogger(__name__)

COLLECTIONS = ("products", "orders", "users")

_locks: dict[Path, threading.RLock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _locks_guard:
        return _locks.setdefault(path, threading.RLock())


def _new_id() -> str:
    return secrets.token_hex(12)


def _encode(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Cannot serialize {type(value).__name__}")


class JsonDocumentStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def unit_of_work(self) -> JsonUnitOfWork:
        return JsonUnitOfWork(self)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict[str, list[dict]]:
        data = json.loads(self._file_path.read_text(encoding="utf-8"))
        for name in COLLECTIONS:
            data.setdefault(name, [])
        return data

    def _persist_raw(self, data: dict[str, list[dict]]) -> None:
        payload = json.dumps(data, indent=2, default=_encode) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._persist_raw({name: [] for name in COLLECTIONS})


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, store: JsonDocumentStore) -> None:
        self._store = store
        self._data: dict[str, list[dict]] | None = None

    def _begin(self) -> None:
        self._store._lock.acquire()
        try:
            self._data = self._store._load_raw()
        except BaseException:
            self._store._lock.release()
            raise
        self.products = JsonProductRepository(self._data)
        self.orders = JsonOrderRepository(self._data)
        self.users = JsonUserRepository(self._data)

    def _commit(self) -> None:
        self._store._persist_raw(self._data)  # type: ignore[arg-type]

    def rollback(self) -> None:
        self._data = None

    def _release(self) -> None:
        self._data = None
        self._store._lock.release()


# --- Repositories ---------------------------------------------------------------


class JsonProductRepository(ProductRepository):

    def __init__(self, data: dict[str, list[dict]]) -> None:
        self._records = data["products"]

    def next_id(self) -> str:
        return _new_id()

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._find(product_id)
        return product_from_document(raw) if raw is not None else None

    def get_many(self, product_ids: list[str]) -> list[Product]:
        wanted = set(product_ids)
        return [product_from_document(r) for r in self._records if r["id"] in wanted]

    def list_all(self) -> list[Product]:
        return [product_from_document(r) for r in self._records]

    def list_by_seller(self, seller_id: str) -> list[Product]:
        return [
            product_from_document(r)
            for r in self._records
            if r.get("created_by") == seller_id
        ]

    def add(self, product: Product) -> None:
        if self._find(product.id) is not None:
            raise ConflictError(f"Product '{product.id}' already exists")
        self._records.append(product_to_document(product))

    def decrement_stock(self, product_id: str, quantity: int) -> None:
        raw = self._find(product_id)
        stock = int(raw.get("stock", 0)) if raw is not None else 0
        if raw is None or stock < quantity:
            raise OutOfStockError(
                [
                    OutOfStockItem(
                        product_id=product_id,
                        name=raw["name"] if raw is not None else "",
                        available_stock=stock,
                        requested_quantity=quantity,
                    )
                ]
            )
        raw["stock"] = stock - quantity

    def _find(self, product_id: str) -> dict | None:
        for raw in self._records:
            if raw["id"] == product_id:
                return raw
        return None


class JsonOrderRepository(OrderRepository):

    def __init__(self, data: dict[str, list[dict]]) -> None:
        self._data = data
        self._records = data["orders"]

    def next_id(self) -> str:
        return _new_id()

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._find(order_id)
        return order_from_document(raw) if raw is not None else None

    def add(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        if self._find(order.id) is not None:
            raise ConflictError("Order creation conflict - duplicate detected")
        self._records.append(order_to_document(order))

    def save(self, order: Order) -> None:
        for i, raw in enumerate(self._records):
            if raw["id"] == order.id:
                self._records[i] = order_to_document(order)
                return
        self._records.append(order_to_document(order))

    def list_by_user(self, user_id: str) -> list[Order]:
        orders = [order_from_document(r) for r in self._records if r["user_id"] == user_id]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def find_orders_containing_seller_products(self, seller_id: str) -> list[SellerOrder]:
        seller_products = [
            product_from_document(r)
            for r in self._data["products"]
            if r.get("created_by") == seller_id
        ]
        if not seller_products:
            return []
        buyers = {
            r["id"]: user_from_document(r).summary() for r in self._data["users"]
        }
        return project_seller_orders(
            (order_from_document(r) for r in self._records),
            seller_products,
            buyers,
        )

    def _find(self, order_id: str) -> dict | None:
        for raw in self._records:
            if raw["id"] == order_id:
                return raw
        return None


class JsonUserRepository(UserRepository):

    def __init__(self, data: dict[str, list[dict]]) -> None:
        self._records = data["users"]

    def get_by_id(self, user_id: str) -> User | None:
        raw = self._find(user_id)
        return user_from_document(raw) if raw is not None else None

    def add(self, user: User) -> None:
        if self._find(user.id) is not None:
            raise ConflictError(f"User '{user.id}' already exists")
        self._records.append(user_to_document(user))

    def save_cart(self, user_id: str, cart: list[CartItem]) -> None:
        raw = self._find(user_id)
        if raw is None:
            raise EntityNotFoundError("User not found")
        raw["cart"] = cart_to_document(cart)

    def clear_cart(self, user_id: str) -> None:
        raw = self._find(user_id)
        if raw is None:
            log.warning(f"Cannot clear cart: user {user_id} not found")
            return
        raw["cart"] = []

    def _find(self, user_id: str) -> dict | None:
        for raw in self._records:
            if raw["id"] == user_id:
                return raw
        return None
