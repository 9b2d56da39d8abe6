"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import (
    Money,
    Quantity,
    ShippingAddress,
    VariantDescriptor,
    ensure_valid_id,
    is_valid_id,
    new_id,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_keeps_decimal_value(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_of_rejects_bool(self):
        with pytest.raises(ValidationError):
            Money.of(True)

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_str_and_plain_formatting(self):
        assert str(Money.of("15")) == "$15.00"
        assert Money.of("9.5").plain == "9.50"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") >= Money.of("10")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid(self):
        assert Quantity(5).value == 5

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(bad)

    @pytest.mark.parametrize("bad", [1.5, "2", True])
    def test_non_integer_rejected(self, bad):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(bad)


# ── VariantDescriptor / ShippingAddress ─────────────────────────────────────


class TestVariantDescriptor:

    def test_from_raw(self):
        d = VariantDescriptor.from_raw({"variant_id": "V1", "size": "M", "color": "red"})
        assert d == VariantDescriptor("V1", "M", "red")

    @pytest.mark.parametrize("raw", [None, "V1", {}, {"size": "M"}])
    def test_unusable_input_gives_none(self, raw):
        assert VariantDescriptor.from_raw(raw) is None

    def test_equality_needs_all_three_fields(self):
        assert VariantDescriptor("V1", "M", "red") != VariantDescriptor("V1", "L", "red")


class TestShippingAddress:

    def test_round_trip_through_raw(self):
        raw = {"street": "1 Main St", "city": "Springfield", "state": "IL", "postal_code": "62701"}
        assert ShippingAddress.from_raw(raw).to_raw() == raw

    def test_incomplete_address_rejected(self):
        with pytest.raises(ValidationError, match="requires street, city and postal code"):
            ShippingAddress.from_raw({"street": "1 Main St"})


# ── Identifiers ──────────────────────────────────────────────────────────────


class TestIdentifiers:

    def test_new_id_is_valid(self):
        assert is_valid_id(new_id())

    def test_new_ids_are_unique(self):
        assert new_id() != new_id()

    @pytest.mark.parametrize("bad", ["", "abc", None, 42])
    def test_malformed_ids(self, bad):
        assert not is_valid_id(bad)

    def test_ensure_valid_id_names_the_kind(self):
        with pytest.raises(ValidationError, match="Invalid product ID"):
            ensure_valid_id("nope", "product")
