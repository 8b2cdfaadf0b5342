"""Abstract unit of work: one transaction, its repositories, its post-commit hooks.

Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (including via an exception) rolls
everything back. Callbacks registered with ``on_commit`` run only after the
underlying commit has succeeded, and are dropped on rollback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

import structlog

from storefront.domain.model.notification import StockAlert
from storefront.domain.repository.notification_repository import NotificationRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.stock_history_repository import StockHistoryRepository
from storefront.domain.repository.user_repository import UserRepository

logger = structlog.get_logger(__name__)


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository
    users: UserRepository
    stock_history: StockHistoryRepository
    notifications: NotificationRepository

    def __init__(self) -> None:
        self._after_commit: list[Callable[[], None]] = []
        self.stock_alerts: list[StockAlert] = []

    def __enter__(self) -> UnitOfWork:
        self._after_commit = []
        self.stock_alerts = []
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        # A no-op when commit() already ran.
        self.rollback()

    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run *callback* once this unit of work has committed."""
        self._after_commit.append(callback)

    def commit(self) -> None:
        self._commit()
        callbacks, self._after_commit = self._after_commit, []
        self.stock_alerts = []
        for callback in callbacks:
            try:
                callback()
            except Exception:
                # Already committed: a hook failure is logged, never raised.
                logger.exception("post_commit_hook_failed", hook=repr(callback))

    def rollback(self) -> None:
        self._after_commit = []
        self.stock_alerts = []
        self._rollback()

    @abstractmethod
    def _commit(self) -> None:
        """Make every write of this unit of work durable."""

    @abstractmethod
    def _rollback(self) -> None:
        """Discard every uncommitted write of this unit of work."""
