"""Tests for the advisory stock pre-check."""

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_availability import StockAvailabilityChecker
from tests.fakes import FakeProductRepository, InMemoryStore


class TestStockAvailabilityChecker:

    def _setup(self):
        store = InMemoryStore(
            products=[
                Product(id="a", name="A", price=Money(100), stock=3),
                Product(id="b", name="B", price=Money(100), stock=10, is_active=False),
            ]
        )
        self.checker = StockAvailabilityChecker(FakeProductRepository(store))

    def test_all_available(self):
        self._setup()
        report = self.checker.check([("a", 3)])
        assert report.all_available
        assert report.checks[0].current_stock == 3

    def test_unknown_product(self):
        self._setup()
        report = self.checker.check([("zzz", 1)])
        assert not report.all_available
        assert report.checks[0].reason == "Product does not exist"

    def test_inactive_product(self):
        self._setup()
        report = self.checker.check([("b", 1)])
        assert report.checks[0].reason == "Product is no longer available"

    def test_insufficient_stock_reports_numbers(self):
        self._setup()
        report = self.checker.check([("a", 5)])
        check = report.checks[0]
        assert not check.available
        assert check.current_stock == 3
        assert check.requested_quantity == 5
        assert "requested 5" in check.reason
        assert "only 3 left" in check.reason

    def test_one_result_per_item_in_order(self):
        self._setup()
        report = self.checker.check([("a", 1), ("zzz", 1), ("b", 1)])
        assert [c.product_id for c in report.checks] == ["a", "zzz", "b"]
        assert [c.product_id for c in report.unavailable_items] == ["zzz", "b"]

    def test_check_does_not_change_stock(self):
        self._setup()
        self.checker.check([("a", 2)])
        report = self.checker.check([("a", 3)])
        assert report.all_available
