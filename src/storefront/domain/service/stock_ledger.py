"""Domain service: the stock ledger.

Every stock change goes through ``StockLedger.adjust``: it reads the
product under a row lock, refuses any change that would make stock
negative, writes the new balance and exactly one history entry in the
caller's unit of work, and queues threshold alerts for after commit.

The ledger never commits; the caller owns the transaction. That lets the
order orchestrator fold several adjustments into the same atomic unit as
the order itself.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import structlog

from storefront.domain.exceptions import InsufficientStockError, NotFoundError
from storefront.domain.model.notification import StockAlert
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockAdjustment, StockHistoryEntry
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_alerts import evaluate_stock_alert

logger = structlog.get_logger(__name__)

AlertSink = Callable[[list[StockAlert]], None]


@dataclass(frozen=True)
class AdjustmentResult:
    product: Product
    entry: StockHistoryEntry


class StockLedger:

    def __init__(self, alert_sink: AlertSink | None = None) -> None:
        self._alert_sink = alert_sink

    def adjust(self, uow: UnitOfWork, adjustment: StockAdjustment) -> AdjustmentResult:
        """Apply ``adjustment.quantity`` to the product's stock.

        Not idempotent: applying the same adjustment twice moves stock twice.

        Raises NotFoundError if the product does not exist and
        InsufficientStockError if the result would be negative. In both
        cases nothing is written.
        """
        product = uow.products.get_for_update(adjustment.product_id)
        if product is None:
            raise NotFoundError(f"Product not found: '{adjustment.product_id}'")

        before = product.stock
        after = before + adjustment.quantity
        if after < 0:
            raise InsufficientStockError(
                product_id=product.id,
                current_stock=before,
                requested=abs(adjustment.quantity),
            )

        product.set_stock(after)
        uow.products.save(product)

        entry = uow.stock_history.add(
            StockHistoryEntry(
                product_id=product.id,
                product_name=product.name,
                change_type=adjustment.change_type,
                quantity=adjustment.quantity,
                before_stock=before,
                after_stock=after,
                reason=adjustment.reason.strip(),
                user_id=adjustment.user_id,
                order_id=adjustment.order_id,
            )
        )

        logger.info(
            "stock_adjusted",
            product_id=product.id,
            change_type=adjustment.change_type.value,
            quantity=adjustment.quantity,
            before_stock=before,
            after_stock=after,
            order_id=adjustment.order_id,
        )

        alert = evaluate_stock_alert(product, before, after, adjustment.quantity)
        if alert is not None:
            self._queue_alert(uow, alert)

        return AdjustmentResult(product=product, entry=entry)

    def _queue_alert(self, uow: UnitOfWork, alert: StockAlert) -> None:
        """Hold *alert* until the unit of work commits.

        All alerts of one transaction are delivered as a single batch.
        """
        if self._alert_sink is None:
            return
        pending = uow.stock_alerts
        if not pending:
            sink = self._alert_sink
            uow.on_commit(lambda: sink(list(pending)))
        pending.append(alert)
