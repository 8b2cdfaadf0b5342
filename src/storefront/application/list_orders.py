"""Application service: List Orders use case (query)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import OrderDTO
from storefront.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, user_id: str | None = None) -> list[OrderDTO]:
        """Return orders newest first, optionally only those of one buyer."""
        with self._uow_factory() as uow:
            orders = uow.orders.list_all(user_id=user_id)
        return [OrderDTO.from_order(o) for o in orders]
