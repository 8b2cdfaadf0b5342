"""Tests for the PlaceOrder use case."""

import pytest

from storefront.application.dto import OrderItemSpec, PlaceOrderCommand
from storefront.application.notify_stock_alerts import StockAlertNotifier
from storefront.application.place_order import PlaceOrderHandler
from storefront.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    OrderNumberExhaustedError,
    StockUnavailableError,
    ValidationError,
)
from storefront.domain.model.notification import NotificationType
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockChangeType
from storefront.domain.model.user import User, UserRole
from storefront.domain.model.value_objects import Money
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import InMemoryStore, uow_factory

BUYER = User(id="buyer", name="Bob", email="bob@example.com")
ADMIN = User(id="admin", name="Ada", email="ada@example.com", role=UserRole.ADMIN)


def _command(*items: tuple[str, int], user_id: str = "buyer") -> PlaceOrderCommand:
    return PlaceOrderCommand(
        user_id=user_id,
        customer_phone="0912345678",
        items=[OrderItemSpec(pid, qty) for pid, qty in items],
    )


class TestPlaceOrder:

    def _setup(self, **handler_kwargs):
        self.store = InMemoryStore(
            products=[
                Product(id="p1", name="Widget", price=Money(10000), stock=3, min_stock=0),
                Product(id="p2", name="Gadget", price=Money(2500), stock=10, min_stock=0),
                Product(id="old", name="Retired", price=Money(100), stock=5, is_active=False),
            ],
            users=[BUYER, ADMIN],
        )
        factory = uow_factory(self.store)
        self.ledger = StockLedger(alert_sink=StockAlertNotifier(factory).notify)
        self.handler = PlaceOrderHandler(factory, self.ledger, **handler_kwargs)

    def _assert_nothing_written(self):
        assert self.store.orders == {}
        assert self.store.history == []
        assert self.store.products["p1"].stock == 3
        assert self.store.products["p2"].stock == 10

    def test_places_order_and_decrements_stock(self):
        self._setup()
        result = self.handler.handle(_command(("p1", 2)))

        assert self.store.products["p1"].stock == 1
        assert result.status == "PAID"
        assert result.payment_status == "COMPLETED"
        assert result.items[0].subtotal == 20000
        assert result.total_amount == 20000

        assert len(self.store.history) == 1
        entry = self.store.history[0]
        assert (entry.quantity, entry.before_stock, entry.after_stock) == (-2, 3, 1)
        assert entry.change_type is StockChangeType.ORDER_PLACED
        assert entry.order_id == result.id
        assert result.order_number in entry.reason

    def test_snapshots_buyer_and_product(self):
        self._setup()
        result = self.handler.handle(_command(("p1", 1), ("p2", 3)))

        assert result.customer_name == "Bob"
        assert result.customer_email == "bob@example.com"
        assert [i.product_name for i in result.items] == ["Widget", "Gadget"]
        assert [i.unit_price for i in result.items] == [10000, 2500]
        assert result.total_amount == 10000 + 3 * 2500
        assert all(i.id is not None for i in result.items)

    def test_price_change_does_not_affect_placed_order(self):
        self._setup()
        result = self.handler.handle(_command(("p1", 1)))
        self.store.products["p1"].update_price(Money(99900))

        stored = self.store.orders[result.id]
        assert stored.items[0].unit_price == Money(10000)
        assert stored.total_amount == Money(10000)

    def test_one_history_entry_per_line(self):
        self._setup()
        self.handler.handle(_command(("p1", 1), ("p2", 4)))
        assert sorted((e.product_id, e.quantity) for e in self.store.history) == [
            ("p1", -1),
            ("p2", -4),
        ]

    def test_insufficient_stock_writes_nothing(self):
        self._setup()
        with pytest.raises(StockUnavailableError) as exc_info:
            self.handler.handle(_command(("p1", 5)))

        (check,) = exc_info.value.items
        assert check.product_id == "p1"
        assert check.current_stock == 3
        self._assert_nothing_written()

    def test_reports_every_unavailable_item(self):
        self._setup()
        with pytest.raises(StockUnavailableError) as exc_info:
            self.handler.handle(_command(("p1", 9), ("p2", 1), ("ghost", 1), ("old", 1)))

        assert [c.product_id for c in exc_info.value.items] == ["p1", "ghost", "old"]
        self._assert_nothing_written()

    def test_failure_at_later_line_rolls_back_earlier_lines(self):
        # Each line passes the pre-check on its own; together they exceed stock.
        self._setup()
        with pytest.raises(InsufficientStockError):
            self.handler.handle(_command(("p2", 4), ("p1", 2), ("p1", 2)))

        self._assert_nothing_written()
        assert self.store.notifications == []

    def test_unknown_user(self):
        self._setup()
        with pytest.raises(NotFoundError, match="User not found"):
            self.handler.handle(_command(("p1", 1), user_id="nobody"))
        self._assert_nothing_written()

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        self._setup()
        with pytest.raises(ValidationError, match="Quantity must be positive"):
            self.handler.handle(_command(("p1", qty)))

    def test_empty_order_rejected(self):
        self._setup()
        with pytest.raises(ValidationError, match="at least one item"):
            self.handler.handle(_command())

    def test_blank_phone_rejected(self):
        self._setup()
        command = PlaceOrderCommand("buyer", " ", [OrderItemSpec("p1", 1)])
        with pytest.raises(ValidationError, match="phone"):
            self.handler.handle(command)

    def test_selling_out_notifies_admins(self):
        self._setup()
        self.handler.handle(_command(("p1", 3)))

        assert [(n.user_id, n.type) for n in self.store.notifications] == [
            ("admin", NotificationType.OUT_OF_STOCK)
        ]


class TestOrderNumbers:

    def _setup(self, numbers, attempts: int = 5):
        self.store = InMemoryStore(
            products=[Product(id="p1", name="Widget", price=Money(100), stock=10)],
            users=[BUYER],
        )
        numbers = iter(numbers)
        self.handler = PlaceOrderHandler(
            uow_factory(self.store),
            StockLedger(),
            order_number_attempts=attempts,
            order_number_factory=lambda: next(numbers),
        )

    def test_collision_is_retried(self):
        self._setup(["25080200001", "25080200001", "25080200002"])
        first = self.handler.handle(_command(("p1", 1)))
        second = self.handler.handle(_command(("p1", 1)))

        assert first.order_number == "25080200001"
        assert second.order_number == "25080200002"

    def test_gives_up_after_max_attempts(self):
        self._setup(["25080200001"] * 4, attempts=3)
        self.handler.handle(_command(("p1", 1)))

        with pytest.raises(OrderNumberExhaustedError):
            self.handler.handle(_command(("p1", 1)))

        assert len(self.store.orders) == 1
        assert self.store.products["p1"].stock == 9
