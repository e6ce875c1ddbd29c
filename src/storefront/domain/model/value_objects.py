"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import MAX_PREC, Context, Decimal, InvalidOperation
from enum import Enum

from storefront.domain.exceptions import InvalidPaymentMethodError, ValidationError

# Sums and products of amounts are never rounded.
_EXACT = Context(prec=MAX_PREC)

_HEX_ID = re.compile(r"[0-9a-fA-F]{24}")


def normalize_id(raw: str) -> str:
    """Canonical form of an entity id: trimmed, hex ids lower-cased."""
    raw = raw.strip()
    return raw.lower() if _HEX_ID.fullmatch(raw) else raw


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(_EXACT.add(self.amount, other.amount), self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(_EXACT.multiply(self.amount, Decimal(factor)), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


class PaymentMethod(Enum):
    PAYPAL = "PayPal"
    STRIPE = "Stripe"
    CREDIT_CARD = "Credit Card"
    CASH_ON_DELIVERY = "Cash on Delivery"
    BANK_TRANSFER = "Bank Transfer"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]

    @classmethod
    def parse(cls, raw: object) -> PaymentMethod:
        """Return the member whose wire value is *raw*."""
        for method in cls:
            if method.value == raw:
                return method
        raise InvalidPaymentMethodError(raw, cls.values())

    @property
    def settles_on_delivery(self) -> bool:
        return self is PaymentMethod.CASH_ON_DELIVERY


@dataclass(frozen=True)
class ShippingAddress:
    street: str
    city: str
    state: str
    zip: str
    country: str

    def __post_init__(self) -> None:
        blank = [
            name
            for name in ("street", "city", "state", "zip", "country")
            if not isinstance(getattr(self, name), str) or not getattr(self, name).strip()
        ]
        if blank:
            raise ValidationError(
                f"Shipping address is missing: {', '.join(blank)}"
            )

    @staticmethod
    def from_dict(raw: dict) -> ShippingAddress:
        if not isinstance(raw, dict):
            raise ValidationError("Shipping address must be an object")
        return ShippingAddress(
            street=raw.get("street", ""),
            city=raw.get("city", ""),
            state=raw.get("state", ""),
            zip=raw.get("zip", ""),
            country=raw.get("country", ""),
        )

    def to_dict(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "country": self.country,
        }


@dataclass(frozen=True)
class PaymentResult:
    """Confirmation returned by a payment provider."""

    payment_id: str | None = None
    status: str | None = None
    update_time: str | None = None
    email_address: str | None = None  # receipt address only

    def to_dict(self) -> dict:
        return {
            "payment_id": self.payment_id,
            "status": self.status,
            "update_time": self.update_time,
            "email_address": self.email_address,
        }

    @staticmethod
    def from_dict(raw: dict | None) -> PaymentResult | None:
        if raw is None:
            return None
        return PaymentResult(
            payment_id=raw.get("payment_id"),
            status=raw.get("status"),
            update_time=raw.get("update_time"),
            email_address=raw.get("email_address"),
        )
