"""MongoDB-backed document store.

A unit of work is a client session with an open multi-document
transaction; every read and write passes that session, so the catalog
lookup and the stock check see the same snapshot the writes go to.
Transactions need a replica set (a single-node one is enough).

Stock is decremented with a filtered ``$inc`` that only matches while
``stock >= quantity``. Two concurrent orders for the last units can
therefore never both succeed: the loser matches nothing (or hits a write
conflict) and its whole transaction is aborted.
"""

from __future__ import annotations

import logging

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.client_session import ClientSession
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from storefront.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    OutOfStockError,
    OutOfStockItem,
)
from storefront.domain.model.order import Order, SellerOrder
from storefront.domain.model.product import Product, ProductSummary
from storefront.domain.model.user import CartItem, User
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.repository.user_repository import UserRepository
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


def _oid(value: str):
    """Documents created by other tools use ObjectId keys; ours do too."""
    return ObjectId(value) if ObjectId.is_valid(value) else value


def _to_mongo(doc: dict) -> dict:
    doc = dict(doc)
    doc["_id"] = _oid(doc.pop("id"))
    return doc


class MongoDocumentStore:

    def __init__(self, client: MongoClient, database: str) -> None:
        self._client = client
        self._db: Database = client[database]

    @classmethod
    def from_url(cls, url: str, database: str) -> MongoDocumentStore:
        return cls(MongoClient(url, tz_aware=True), database)

    def unit_of_work(self) -> MongoUnitOfWork:
        return MongoUnitOfWork(self._client, self._db)

    def ensure_indexes(self) -> None:
        self._db.orders.create_index([("user_id", ASCENDING), ("created_at", ASCENDING)])
        self._db.orders.create_index("items.product_id")
        self._db.products.create_index("created_by")
        log.info("MongoDB indexes ensured")


class MongoUnitOfWork(UnitOfWork):

    def __init__(self, client: MongoClient, db: Database) -> None:
        self._client = client
        self._db = db
        self._session: ClientSession | None = None

    def _begin(self) -> None:
        self._session = self._client.start_session()
        try:
            self._session.start_transaction()
        except BaseException:
            self._session.end_session()
            raise
        self.products = MongoProductRepository(self._db, self._session)
        self.orders = MongoOrderRepository(self._db, self._session)
        self.users = MongoUserRepository(self._db, self._session)

    def _commit(self) -> None:
        try:
            self._session.commit_transaction()  # type: ignore[union-attr]
        except OperationFailure as exc:
            if exc.has_error_label("TransientTransactionError"):
                raise ConflictError("Order processing error") from exc
            raise

    def rollback(self) -> None:
        if self._session is not None and self._session.in_transaction:
            self._session.abort_transaction()

    def _release(self) -> None:
        if self._session is not None:
            self._session.end_session()
            self._session = None


# --- Repositories ---------------------------------------------------------------


def _conflict_on_transient(exc: PyMongoError) -> None:
    if exc.has_error_label("TransientTransactionError"):
        raise ConflictError("Order processing error") from exc


class MongoProductRepository(ProductRepository):

    def __init__(self, db: Database, session: ClientSession) -> None:
        self._collection = db.products
        self._session = session

    def next_id(self) -> str:
        return str(ObjectId())

    def get_by_id(self, product_id: str) -> Product | None:
        doc = self._collection.find_one({"_id": _oid(product_id)}, session=self._session)
        return product_from_document(doc) if doc is not None else None

    def get_many(self, product_ids: list[str]) -> list[Product]:
        cursor = self._collection.find(
            {"_id": {"$in": [_oid(pid) for pid in product_ids]}}, session=self._session
        )
        return [product_from_document(doc) for doc in cursor]

    def list_all(self) -> list[Product]:
        return [product_from_document(doc) for doc in self._collection.find(session=self._session)]

    def list_by_seller(self, seller_id: str) -> list[Product]:
        cursor = self._collection.find({"created_by": seller_id}, session=self._session)
        return [product_from_document(doc) for doc in cursor]

    def add(self, product: Product) -> None:
        try:
            self._collection.insert_one(_to_mongo(product_to_document(product)), session=self._session)
        except DuplicateKeyError as exc:
            raise ConflictError(f"Product '{product.id}' already exists") from exc

    def decrement_stock(self, product_id: str, quantity: int) -> None:
        try:
            result = self._collection.update_one(
                {"_id": _oid(product_id), "stock": {"$gte": quantity}},
                {"$inc": {"stock": -quantity}},
                session=self._session,
            )
        except OperationFailure as exc:
            _conflict_on_transient(exc)
            raise
        if result.modified_count == 1:
            return

        current = self.get_by_id(product_id)
        raise OutOfStockError(
            [
                OutOfStockItem(
                    product_id=product_id,
                    name=current.name if current else "",
                    available_stock=current.stock if current else 0,
                    requested_quantity=quantity,
                )
            ]
        )


class MongoOrderRepository(OrderRepository):

    def __init__(self, db: Database, session: ClientSession) -> None:
        self._db = db
        self._collection = db.orders
        self._session = session

    def next_id(self) -> str:
        return str(ObjectId())

    def get_by_id(self, order_id: str) -> Order | None:
        doc = self._collection.find_one({"_id": _oid(order_id)}, session=self._session)
        return order_from_document(doc) if doc is not None else None

    def add(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        try:
            self._collection.insert_one(_to_mongo(order_to_document(order)), session=self._session)
        except DuplicateKeyError as exc:
            raise ConflictError("Order creation conflict - duplicate detected") from exc
        except OperationFailure as exc:
            _conflict_on_transient(exc)
            raise

    def save(self, order: Order) -> None:
        doc = _to_mongo(order_to_document(order))
        self._collection.replace_one({"_id": doc["_id"]}, doc, upsert=True, session=self._session)

    def list_by_user(self, user_id: str) -> list[Order]:
        cursor = self._collection.find({"user_id": user_id}, session=self._session).sort(
            [("created_at", DESCENDING), ("_id", DESCENDING)]
        )
        return [order_from_document(doc) for doc in cursor]

    def find_orders_containing_seller_products(self, seller_id: str) -> list[SellerOrder]:
        products = {
            str(doc["_id"]): product_from_document(doc)
            for doc in self._db.products.find({"created_by": seller_id}, session=self._session)
        }
        if not products:
            return []
        product_ids = list(products)

        pipeline = [
            {"$match": {"items.product_id": {"$in": product_ids}}},
            {
                "$addFields": {
                    "items": {
                        "$filter": {
                            "input": "$items",
                            "as": "item",
                            "cond": {"$in": ["$$item.product_id", product_ids]},
                        }
                    }
                }
            },
            {"$sort": {"created_at": DESCENDING, "_id": DESCENDING}},
        ]
        orders = [
            order_from_document(doc)
            for doc in self._collection.aggregate(pipeline, session=self._session)
        ]

        buyer_ids = list({order.user_id for order in orders})
        buyers = {
            str(doc["_id"]): user_from_document(doc).summary()
            for doc in self._db.users.find(
                {"_id": {"$in": [_oid(uid) for uid in buyer_ids]}},
                {"password": 0},
                session=self._session,
            )
        }

        return [
            SellerOrder(
                order=order,
                buyer=buyers.get(order.user_id),
                products=[
                    ProductSummary.of(products[pid])
                    for pid in dict.fromkeys(order.product_ids)
                ],
            )
            for order in orders
        ]


class MongoUserRepository(UserRepository):

    def __init__(self, db: Database, session: ClientSession) -> None:
        self._collection = db.users
        self._session = session

    def get_by_id(self, user_id: str) -> User | None:
        doc = self._collection.find_one({"_id": _oid(user_id)}, session=self._session)
        return user_from_document(doc) if doc is not None else None

    def add(self, user: User) -> None:
        try:
            self._collection.insert_one(_to_mongo(user_to_document(user)), session=self._session)
        except DuplicateKeyError as exc:
            raise ConflictError(f"User '{user.id}' already exists") from exc

    def save_cart(self, user_id: str, cart: list[CartItem]) -> None:
        result = self._collection.update_one(
            {"_id": _oid(user_id)},
            {"$set": {"cart": cart_to_document(cart)}},
            session=self._session,
        )
        if result.matched_count == 0:
            raise EntityNotFoundError("User not found")

    def clear_cart(self, user_id: str) -> None:
        self._collection.update_one(
            {"_id": _oid(user_id)}, {"$set": {"cart": []}}, session=self._session
        )
