"""Tests for stock history, low stock and availability queries."""

import pytest

from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.check_availability import CheckAvailabilityHandler
from storefront.application.dto import OrderItemSpec, PlaceOrderCommand
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_low_stock import ShowLowStockHandler
from storefront.application.show_stock_history import ShowStockHistoryHandler
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.user import User, UserRole
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import InMemoryStore, uow_factory


class TestStockHistory:

    def _setup(self):
        self.store = InMemoryStore(
            products=[
                Product(id="p1", name="Widget", price=Money(100), stock=10),
                Product(id="p2", name="Gadget", price=Money(100), stock=10),
            ],
            users=[
                User(id="a1", name="Ada", email="ada@example.com", role=UserRole.ADMIN),
                User(id="u1", name="Bob", email="bob@example.com"),
            ],
        )
        factory = uow_factory(self.store)
        self.adjust = AdjustStockHandler(factory, StockLedger())
        self.history = ShowStockHistoryHandler(factory)
        self.place = PlaceOrderHandler(factory, StockLedger())

    def test_newest_first(self):
        self._setup()
        for delta in (1, 2, 3):
            self.adjust.handle("p1", delta, f"delivery {delta}")

        entries = self.history.handle("p1")
        assert [e.quantity for e in entries] == [3, 2, 1]

    def test_only_requested_product(self):
        self._setup()
        self.adjust.handle("p1", 1, "delivery")
        self.adjust.handle("p2", -1, "breakage")

        assert [e.product_id for e in self.history.handle("p2")] == ["p2"]

    def test_limit(self):
        self._setup()
        for _ in range(5):
            self.adjust.handle("p1", 1, "delivery")

        entries = self.history.handle("p1", limit=2)
        assert len(entries) == 2
        assert entries[0].after_stock == 15

    def test_entries_name_the_actor_and_the_order(self):
        self._setup()
        order = self.place.handle(
            PlaceOrderCommand("u1", "0912345678", [OrderItemSpec("p1", 2)])
        )
        self.adjust.handle("p1", 5, "supplier delivery", user_id="a1")

        adjusted, ordered = self.history.handle("p1")
        assert (adjusted.user_name, adjusted.user_email) == ("Ada", "ada@example.com")
        assert adjusted.order_number is None
        assert ordered.order_number == order.order_number
        assert ordered.order_id == order.id
        assert ordered.user_name is None

    def test_unknown_product_has_empty_history(self):
        self._setup()
        assert self.history.handle("ghost") == []

    def test_non_positive_limit_rejected(self):
        self._setup()
        with pytest.raises(ValidationError, match="Limit must be positive"):
            self.history.handle("p1", limit=0)


class TestLowStock:

    def _setup(self):
        self.store = InMemoryStore(
            products=[
                Product(id="a", name="Apple", price=Money(100), stock=3, min_stock=5),
                Product(id="b", name="Banana", price=Money(100), stock=1, min_stock=2),
                Product(id="c", name="Cherry", price=Money(100), stock=5, min_stock=5),
                Product(id="d", name="Date", price=Money(100), stock=0, min_stock=4, is_active=False),
            ]
        )
        self.handler = ShowLowStockHandler(uow_factory(self.store))

    def test_active_below_minimum_ascending_by_stock(self):
        self._setup()
        assert [p.id for p in self.handler.handle()] == ["b", "a"]


class TestCheckAvailability:

    def _setup(self):
        self.store = InMemoryStore(
            products=[Product(id="p1", name="Widget", price=Money(100), stock=2)]
        )
        self.handler = CheckAvailabilityHandler(uow_factory(self.store))

    def test_reports_per_item(self):
        self._setup()
        report = self.handler.handle([OrderItemSpec("p1", 2), OrderItemSpec("p1", 3)])
        assert [c.available for c in report.checks] == [True, False]
        assert not report.all_available

    def test_rejects_bad_quantity_before_lookup(self):
        self._setup()
        with pytest.raises(ValidationError):
            self.handler.handle([OrderItemSpec("p1", 0)])

    def test_writes_nothing(self):
        self._setup()
        self.handler.handle([OrderItemSpec("p1", 1)])
        assert self.store.products["p1"].stock == 2
        assert self.store.history == []
