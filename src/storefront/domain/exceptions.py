"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the API and CLI layers can catch them uniformly and translate them into
client-facing responses.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class MissingFieldsError(ValidationError):
    """Required request fields are absent.

    ``missing_fields`` maps every checked field to whether it is missing.
    """

    def __init__(self, missing_fields: dict[str, bool]) -> None:
        self.missing_fields = missing_fields
        super().__init__("Required fields are missing")


class InvalidPaymentMethodError(ValidationError):

    def __init__(self, value: object, valid_payment_methods: list[str]) -> None:
        self.value = value
        self.valid_payment_methods = valid_payment_methods
        super().__init__("Invalid payment method")


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


NotFoundError = EntityNotFoundError


class ProductsNotFoundError(EntityNotFoundError):

    def __init__(self, missing_product_ids: list[str]) -> None:
        self.missing_product_ids = missing_product_ids
        super().__init__("Some products not found")


@dataclass(frozen=True)
class OutOfStockItem:
    product_id: str
    name: str
    available_stock: int
    requested_quantity: int


class OutOfStockError(DomainException):
    """At least one line item asks for more than the product has in stock."""

    def __init__(self, items: list[OutOfStockItem]) -> None:
        self.items = items
        super().__init__("Some items are out of stock")


class ConflictError(DomainException):
    """The store rejected a write (duplicate key, aborted transaction)."""


class InvalidTransitionError(ConflictError):
    """An order status transition is not allowed from the current state."""
