"""Application service: Cancel Order Stock use case.

Compensating action for an order that will not be fulfilled: puts the
stock consumed at placement back, one ORDER_CANCELLED ledger entry per
product. It is deliberately separate from the order's status; cancelling
an order does not restock by itself, and restocking does not cancel.

Only what the order actually consumed can come back, and only once:
earlier ORDER_CANCELLED entries for the same order count against it.
"""

from __future__ import annotations

from collections import Counter
from typing import Callable

from storefront.application.dto import OrderItemSpec, StockHistoryDTO
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.model.order import Order
from storefront.domain.model.stock import StockAdjustment, StockChangeType
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_ledger import StockLedger


class CancelOrderStockHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        ledger: StockLedger,
    ) -> None:
        self._uow_factory = uow_factory
        self._ledger = ledger

    def handle(
        self,
        order_id: int,
        items: list[OrderItemSpec] | None = None,
        user_id: str | None = None,
    ) -> list[StockHistoryDTO]:
        """Return stock for *items*, or everything not yet returned if omitted."""
        requested: Counter[str] | None = None
        if items is not None:
            requested = Counter()
            for spec in items:
                requested[spec.product_id] += Quantity(spec.quantity).value

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            remaining = self._remaining(uow, order)
            if requested is None:
                if not remaining:
                    raise ValidationError(
                        f"Stock for order {order.order_number} was already returned"
                    )
                requested = remaining
            else:
                self._check_returnable(order, requested, remaining)

            entries = []
            for product_id, qty in requested.items():
                result = self._ledger.adjust(
                    uow,
                    StockAdjustment(
                        product_id=product_id,
                        quantity=qty,
                        reason=(
                            f"Order {order.order_number} cancelled: "
                            f"{qty} unit(s) returned"
                        ),
                        change_type=StockChangeType.ORDER_CANCELLED,
                        user_id=user_id,
                        order_id=order.id,
                    ),
                )
                entries.append(StockHistoryDTO.from_entry(result.entry))

            uow.commit()

        return entries

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _remaining(uow: UnitOfWork, order: Order) -> Counter[str]:
        """Units per product the order consumed and has not had back yet."""
        ordered: Counter[str] = Counter()
        for item in order.items:
            ordered[item.product_id] += item.quantity.value

        returned: Counter[str] = Counter()
        for entry in uow.stock_history.list_for_order(order.id):  # type: ignore[arg-type]
            if entry.change_type is StockChangeType.ORDER_CANCELLED:
                returned[entry.product_id] += entry.quantity

        return ordered - returned

    @staticmethod
    def _check_returnable(
        order: Order,
        requested: Counter[str],
        remaining: Counter[str],
    ) -> None:
        on_order = {item.product_id for item in order.items}
        for product_id, qty in requested.items():
            if product_id not in on_order:
                raise ValidationError(
                    f"Product '{product_id}' is not part of order {order.order_number}"
                )
            if qty > remaining[product_id]:
                raise ValidationError(
                    f"Cannot return {qty} unit(s) of '{product_id}' for order "
                    f"{order.order_number}: only {remaining[product_id]} outstanding"
                )
