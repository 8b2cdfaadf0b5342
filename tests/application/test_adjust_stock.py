"""Tests for the AdjustStock use case and the alerts it triggers."""

import pytest

from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.notify_stock_alerts import StockAlertNotifier
from storefront.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from storefront.domain.model.notification import NotificationPriority, NotificationType
from storefront.domain.model.product import Product
from storefront.domain.model.user import User, UserRole
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import InMemoryStore, uow_factory


def _build(stock: int, min_stock: int):
    store = InMemoryStore(
        products=[
            Product(id="p1", name="Widget", price=Money(100), stock=stock, min_stock=min_stock)
        ],
        users=[
            User(id="a1", name="Ada", email="ada@example.com", role=UserRole.ADMIN),
            User(id="a2", name="Alan", email="alan@example.com", role=UserRole.ADMIN),
            User(id="u1", name="Bob", email="bob@example.com"),
        ],
    )
    factory = uow_factory(store)
    ledger = StockLedger(alert_sink=StockAlertNotifier(factory).notify)
    return store, AdjustStockHandler(factory, ledger)


class TestAdjustStock:

    def _setup(self, stock: int = 10, min_stock: int = 5):
        self.store, self.handler = _build(stock, min_stock)

    def test_returns_product_and_history(self):
        self._setup()
        result = self.handler.handle("p1", -2, "damaged in storage", user_id="a1")

        assert result.product.stock == 8
        assert result.history.before_stock == 10
        assert result.history.after_stock == 8
        assert result.history.change_type == "ADMIN_ADJUST"
        assert result.history.user_id == "a1"
        assert result.history.reason == "damaged in storage"

    def test_change_type_accepts_string(self):
        self._setup()
        result = self.handler.handle("p1", 5, "supplier delivery", change_type="restock")
        assert result.history.change_type == "RESTOCK"

    def test_invalid_change_type(self):
        self._setup()
        with pytest.raises(ValidationError, match="Invalid change type"):
            self.handler.handle("p1", 5, "gift", change_type="GIFT")

    def test_rejects_negative_result_and_leaves_stock(self):
        self._setup(stock=3)
        with pytest.raises(InsufficientStockError, match="current 3, requested 4"):
            self.handler.handle("p1", -4, "shrinkage")

        assert self.store.products["p1"].stock == 3
        assert self.store.history == []

    def test_unknown_product(self):
        self._setup()
        with pytest.raises(NotFoundError):
            self.handler.handle("missing", 1, "recount")

    def test_zero_delta_rejected(self):
        self._setup()
        with pytest.raises(ValidationError, match="non-zero"):
            self.handler.handle("p1", 0, "noop")

    def test_stock_equals_last_entry_after_many_adjustments(self):
        self._setup(stock=10)
        for delta in (-4, 7, -13, 2):
            self.handler.handle("p1", delta, "recount")

        assert self.store.products["p1"].stock == 2
        assert len(self.store.history) == 4
        assert self.store.history[-1].after_stock == 2
        assert sum(e.quantity for e in self.store.history) == 2 - 10


class TestThresholdNotifications:

    def _setup(self):
        self.store, self.handler = _build(stock=6, min_stock=5)

    def test_threshold_sequence(self):
        self._setup()
        self.handler.handle("p1", -2, "sale")      # 6 -> 4
        self.handler.handle("p1", -2, "sale")      # 4 -> 2
        self.handler.handle("p1", -2, "sale")      # 2 -> 0
        self.handler.handle("p1", 3, "delivery")   # 0 -> 3

        expected = [
            NotificationType.LOW_STOCK_WARNING,
            NotificationType.OUT_OF_STOCK,
            NotificationType.STOCK_RESTOCK,
        ]
        assert [n.type for n in self.store.notifications if n.user_id == "a1"] == expected
        assert [n.type for n in self.store.notifications if n.user_id == "a2"] == expected

    def test_only_admins_are_notified(self):
        self._setup()
        self.handler.handle("p1", -6, "sale")

        assert sorted(n.user_id for n in self.store.notifications) == ["a1", "a2"]
        notification = self.store.notifications[0]
        assert notification.priority is NotificationPriority.URGENT
        assert notification.data["productId"] == "p1"
        assert not notification.is_read

    def test_failed_adjustment_notifies_nobody(self):
        self._setup()
        with pytest.raises(InsufficientStockError):
            self.handler.handle("p1", -7, "sale")
        assert self.store.notifications == []
