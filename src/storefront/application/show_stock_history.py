"""Application service: Show Stock History use case (query)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import StockHistoryDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.repository.unit_of_work import UnitOfWork

DEFAULT_LIMIT = 50


class ShowStockHistoryHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: str, limit: int = DEFAULT_LIMIT) -> list[StockHistoryDTO]:
        """Return the newest *limit* ledger entries for a product."""
        if limit <= 0:
            raise ValidationError("Limit must be positive")
        with self._uow_factory() as uow:
            entries = uow.stock_history.list_for_product(product_id, limit)
        return [StockHistoryDTO.from_entry(e) for e in entries]
