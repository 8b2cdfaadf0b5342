"""Unit tests for Money and Quantity value objects."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class TestMoney:

    def test_amount_is_integer_minor_units(self):
        assert Money(10000).amount == 10000

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="integer number of minor units"):
            Money(100.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            Money(True)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(-1)

    def test_addition(self):
        assert Money(150) + Money(250) == Money(400)

    def test_multiply_by_int_stays_exact(self):
        assert Money(333) * 3 == Money(999)

    def test_multiply_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money(100) * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(100, "TWD") + Money(100, "USD")

    def test_display_in_major_units(self):
        assert str(Money(10000)) == "100.00"
        assert str(Money(5)) == "0.05"

    def test_of_parses_strings(self):
        assert Money.of("20000") == Money(20000)

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("12.50")


class TestQuantity:

    def test_positive_accepted(self):
        assert Quantity(2).value == 2

    @pytest.mark.parametrize("value", [0, -3])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity("2")
