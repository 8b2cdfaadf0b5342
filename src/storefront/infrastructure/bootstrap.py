"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The engine is created
here, explicitly, and released by whoever created the Container.
"""

from __future__ import annotations

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.application.add_product import AddProductHandler
from storefront.application.add_user import AddUserHandler
from storefront.application.adjust_stock import AdjustStockHandler
from storefront.application.cancel_order_stock import CancelOrderStockHandler
from storefront.application.check_availability import CheckAvailabilityHandler
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.notify_stock_alerts import StockAlertNotifier
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_low_stock import ShowLowStockHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.show_stock_history import ShowStockHistoryHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.service.stock_ledger import StockLedger
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.orm import Base
from storefront.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


def build_engine(settings: Settings) -> Engine:
    url = settings.database_url
    if url in ("sqlite://", "sqlite:///:memory:"):
        # One shared connection, or every session would see its own empty database.
        engine = create_engine(
            url,
            echo=settings.sql_echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url, echo=settings.sql_echo)
    if engine.dialect.name == "sqlite":
        _begin_immediate(engine)
    return engine


def _begin_immediate(engine: Engine) -> None:
    """Make every SQLite transaction take the database write lock up front.

    pysqlite defers ``BEGIN`` until the first write and SQLite has no
    ``SELECT ... FOR UPDATE``, so without this the ledger's read of a
    product's stock happens outside the lock that guards its write.
    """

    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin_immediate(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class Container:

    def __init__(self, settings: Settings, engine: Engine | None = None) -> None:
        self.settings = settings
        self.engine = engine if engine is not None else build_engine(settings)
        self.session_factory: sessionmaker[Session] = sessionmaker(
            bind=self.engine, expire_on_commit=False
        )
        self.notifier = StockAlertNotifier(self.unit_of_work)
        self.ledger = StockLedger(alert_sink=self.notifier.notify)

    # --- Lifecycle ------------------------------------------------------------

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    # --- Factories ------------------------------------------------------------

    def unit_of_work(self) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(self.session_factory)

    def place_order(self) -> PlaceOrderHandler:
        return PlaceOrderHandler(
            self.unit_of_work,
            self.ledger,
            order_number_attempts=self.settings.order_number_attempts,
        )

    def adjust_stock(self) -> AdjustStockHandler:
        return AdjustStockHandler(self.unit_of_work, self.ledger)

    def check_availability(self) -> CheckAvailabilityHandler:
        return CheckAvailabilityHandler(self.unit_of_work)

    def cancel_order_stock(self) -> CancelOrderStockHandler:
        return CancelOrderStockHandler(self.unit_of_work, self.ledger)

    def list_orders(self) -> ListOrdersHandler:
        return ListOrdersHandler(self.unit_of_work)

    def update_order(self) -> UpdateOrderHandler:
        return UpdateOrderHandler(self.unit_of_work)

    def show_order(self) -> ShowOrderHandler:
        return ShowOrderHandler(self.unit_of_work)

    def stock_history(self) -> ShowStockHistoryHandler:
        return ShowStockHistoryHandler(self.unit_of_work)

    def low_stock(self) -> ShowLowStockHandler:
        return ShowLowStockHandler(self.unit_of_work)

    def add_product(self) -> AddProductHandler:
        return AddProductHandler(self.unit_of_work, self.ledger)

    def add_user(self) -> AddUserHandler:
        return AddUserHandler(self.unit_of_work)
