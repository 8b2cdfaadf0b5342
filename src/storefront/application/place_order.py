"""Application service: Place Order use case.

Orchestrates the whole order transaction: pre-check stock, snapshot
current prices into line items, persist the order, and decrement stock
for every line through the ledger, all in one unit of work. If any line
cannot be decremented nothing is persisted, neither the order nor the
stock changes of earlier lines.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.application.dto import OrderDTO, PlaceOrderCommand
from storefront.domain.exceptions import (
    NotFoundError,
    OrderNumberExhaustedError,
    StockUnavailableError,
    ValidationError,
)
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.stock import StockAdjustment, StockChangeType
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.order_number import generate_order_number
from storefront.domain.service.stock_availability import StockAvailabilityChecker
from storefront.domain.service.stock_ledger import StockLedger

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        ledger: StockLedger,
        order_number_attempts: int = 5,
        order_number_factory: Callable[[], str] = generate_order_number,
    ) -> None:
        self._uow_factory = uow_factory
        self._ledger = ledger
        self._order_number_attempts = order_number_attempts
        self._order_number_factory = order_number_factory

    def handle(self, command: PlaceOrderCommand) -> OrderDTO:
        """Place an order and return it with its line items.

        Steps:
        1. Validate input (before any I/O).
        2. Resolve the buyer.
        3. Advisory stock pre-check over all items.
        4. Load active products and build price-snapshot line items.
        5. Persist order + items and decrement stock per line, atomically.
        """
        self._validate(command)

        with self._uow_factory() as uow:
            user = uow.users.get_by_id(command.user_id)
            if user is None:
                raise NotFoundError(f"User not found: '{command.user_id}'")

            report = StockAvailabilityChecker(uow.products).check(
                [(spec.product_id, spec.quantity) for spec in command.items]
            )
            if not report.all_available:
                raise StockUnavailableError(report.unavailable_items)

            distinct_ids = list(dict.fromkeys(spec.product_id for spec in command.items))
            products = {p.id: p for p in uow.products.find_active(distinct_ids)}
            if len(products) != len(distinct_ids):
                missing = [pid for pid in distinct_ids if pid not in products]
                raise NotFoundError(
                    f"Products not found or inactive: {', '.join(missing)}"
                )

            items: list[OrderItem] = []
            for spec in command.items:
                product = products[spec.product_id]
                items.append(
                    OrderItem(
                        product_id=product.id,
                        product_name=product.name,
                        product_image=product.image_url,
                        unit_price=product.price,  # <-- price snapshot
                        quantity=Quantity(spec.quantity),
                    )
                )

            order = Order.create(
                order_number=self._next_order_number(uow.orders),
                customer=user,
                customer_phone=command.customer_phone,
                items=items,
                customer_note=command.customer_note,
                admin_note=command.admin_note,
            )
            uow.orders.save(order)

            for item in order.items:
                self._ledger.adjust(
                    uow,
                    StockAdjustment(
                        product_id=item.product_id,
                        quantity=-item.quantity.value,
                        reason=(
                            f"Order {order.order_number}: "
                            f"{item.quantity.value} unit(s) purchased"
                        ),
                        change_type=StockChangeType.ORDER_PLACED,
                        order_id=order.id,
                    ),
                )

            uow.commit()

        logger.info(
            "order_placed",
            order_id=order.id,
            order_number=order.order_number,
            user_id=order.user_id,
            total_amount=order.total_amount.amount,
            line_count=len(order.items),
        )
        return OrderDTO.from_order(order)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _validate(command: PlaceOrderCommand) -> None:
        if not command.user_id:
            raise ValidationError("User ID is required")
        if not command.customer_phone or not command.customer_phone.strip():
            raise ValidationError("Customer phone is required")
        if not command.items:
            raise ValidationError("Order must contain at least one item")
        for spec in command.items:
            if not spec.product_id:
                raise ValidationError("Every item needs a product ID")
            Quantity(spec.quantity)

    def _next_order_number(self, orders: OrderRepository) -> str:
        for _ in range(self._order_number_attempts):
            candidate = self._order_number_factory()
            if not orders.order_number_exists(candidate):
                return candidate
            logger.warning("order_number_collision", order_number=candidate)
        raise OrderNumberExhaustedError(
            f"Could not generate a unique order number "
            f"after {self._order_number_attempts} attempts"
        )
