"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import InvalidPaymentMethodError, ValidationError
from storefront.domain.model.value_objects import (
    Money,
    PaymentMethod,
    PaymentResult,
    Quantity,
    ShippingAddress,
    normalize_id,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_digits(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    @pytest.mark.parametrize("raw", ["abc", "NaN", "Infinity", True, None])
    def test_invalid_input_rejected(self, raw):
        with pytest.raises(ValidationError):
            Money.of(raw)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_addition_keeps_every_digit(self):
        total = Money.of("1234567890123456789012345678.99") + Money.of("0.001")
        assert total.amount == Decimal("1234567890123456789012345678.991")

    def test_multiply_by_int(self):
        assert Money.of("1000") * 2 == Money.of("2000")

    def test_multiplication_keeps_every_digit(self):
        product = Money.of("123456789012345678901234567.89") * 3
        assert product.amount == Decimal("370370367037037036703703703.67")

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("1") * 1.5  # type: ignore[operator]

    def test_str(self):
        assert str(Money.of("7")) == "$7.00"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("raw", [0, -1])
    def test_non_positive_rejected(self, raw):
        with pytest.raises(ValidationError, match="positive"):
            Quantity(raw)

    @pytest.mark.parametrize("raw", ["2", 1.5, True, None])
    def test_non_integer_rejected(self, raw):
        with pytest.raises(ValidationError, match="integer"):
            Quantity(raw)


# ── PaymentMethod ────────────────────────────────────────────────────────────


class TestPaymentMethod:

    def test_parse_wire_value(self):
        assert PaymentMethod.parse("Cash on Delivery") is PaymentMethod.CASH_ON_DELIVERY

    def test_unknown_value_lists_valid_methods(self):
        with pytest.raises(InvalidPaymentMethodError) as exc_info:
            PaymentMethod.parse("Bitcoin")
        assert exc_info.value.valid_payment_methods == [
            "PayPal",
            "Stripe",
            "Credit Card",
            "Cash on Delivery",
            "Bank Transfer",
        ]

    def test_parse_is_case_sensitive(self):
        with pytest.raises(InvalidPaymentMethodError):
            PaymentMethod.parse("paypal")

    def test_only_cash_settles_on_delivery(self):
        settling = [m for m in PaymentMethod if m.settles_on_delivery]
        assert settling == [PaymentMethod.CASH_ON_DELIVERY]


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_round_trip_dict(self):
        raw = {"street": "1 Main", "city": "X", "state": "Y", "zip": "1", "country": "Z"}
        assert ShippingAddress.from_dict(raw).to_dict() == raw

    def test_missing_parts_are_named(self):
        with pytest.raises(ValidationError, match="city, zip"):
            ShippingAddress.from_dict(
                {"street": "1 Main", "city": " ", "state": "Y", "country": "Z"}
            )

    def test_non_dict_rejected(self):
        with pytest.raises(ValidationError, match="must be an object"):
            ShippingAddress.from_dict("1 Main St")  # type: ignore[arg-type]


class TestPaymentResult:

    def test_from_none(self):
        assert PaymentResult.from_dict(None) is None

    def test_from_dict(self):
        result = PaymentResult.from_dict({"payment_id": "PAY-1", "status": "COMPLETED"})
        assert result == PaymentResult(payment_id="PAY-1", status="COMPLETED")


# ── Ids ──────────────────────────────────────────────────────────────────────


class TestNormalizeId:

    def test_hex_id_lower_cased(self):
        assert normalize_id("64F1A2B3C4D5E6F7A8B9C0D1") == "64f1a2b3c4d5e6f7a8b9c0d1"

    def test_whitespace_trimmed(self):
        assert normalize_id("  64f1a2b3c4d5e6f7a8b9c0d1 ") == "64f1a2b3c4d5e6f7a8b9c0d1"

    @pytest.mark.parametrize("raw", ["Laptop-SKU", "64F1A2B3C4D5E6F7A8B9C0D", "p1"])
    def test_other_ids_kept_as_is(self, raw):
        assert normalize_id(raw) == raw
