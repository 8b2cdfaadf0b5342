"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def _product(**overrides) -> Product:
    fields = dict(id="p1", name="Widget", price=Money(10000), stock=10, min_stock=5)
    fields.update(overrides)
    return Product(**fields)


class TestProductInvariants:

    def test_negative_stock_rejected_on_construction(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            _product(stock=-1)

    def test_negative_min_stock_rejected(self):
        with pytest.raises(ValidationError, match="Minimum stock"):
            _product(min_stock=-1)

    def test_set_stock_rejects_negative(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.set_stock(-1)
        assert product.stock == 10

    def test_low_stock_flag(self):
        assert _product(stock=4).is_low_stock
        assert not _product(stock=5).is_low_stock


class TestProductPrice:

    def test_update_price(self):
        product = _product()
        product.update_price(Money(12000))
        assert product.price == Money(12000)

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _product().update_price(Money(0))
