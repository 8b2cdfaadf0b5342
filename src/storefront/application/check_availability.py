"""Application service: Check Availability use case (query)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import OrderItemSpec
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_availability import (
    AvailabilityReport,
    StockAvailabilityChecker,
)


class CheckAvailabilityHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, items: list[OrderItemSpec]) -> AvailabilityReport:
        for spec in items:
            Quantity(spec.quantity)

        with self._uow_factory() as uow:
            return StockAvailabilityChecker(uow.products).check(
                [(spec.product_id, spec.quantity) for spec in items]
            )
