"""Application service: Show Low Stock use case (query)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import ProductDTO
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowLowStockHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            products = uow.products.list_low_stock()
        return [ProductDTO.from_product(p) for p in products]
