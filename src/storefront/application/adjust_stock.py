"""Application service: Adjust Stock use case (admin adjustments and restocks)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import ProductDTO, StockAdjustmentDTO, StockHistoryDTO
from storefront.domain.model.stock import StockAdjustment, StockChangeType
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_ledger import StockLedger


class AdjustStockHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        ledger: StockLedger,
    ) -> None:
        self._uow_factory = uow_factory
        self._ledger = ledger

    def handle(
        self,
        product_id: str,
        quantity: int,
        reason: str,
        change_type: StockChangeType | str = StockChangeType.ADMIN_ADJUST,
        user_id: str | None = None,
        order_id: int | None = None,
    ) -> StockAdjustmentDTO:
        """Move a product's stock by *quantity* (negative to remove).

        Runs in its own transaction; threshold alerts go out after commit.
        """
        if isinstance(change_type, str):
            change_type = StockChangeType.parse(change_type)

        adjustment = StockAdjustment(
            product_id=product_id,
            quantity=quantity,
            reason=reason,
            change_type=change_type,
            user_id=user_id,
            order_id=order_id,
        )

        with self._uow_factory() as uow:
            result = self._ledger.adjust(uow, adjustment)
            uow.commit()

        return StockAdjustmentDTO(
            product=ProductDTO.from_product(result.product),
            history=StockHistoryDTO.from_entry(result.entry),
        )
