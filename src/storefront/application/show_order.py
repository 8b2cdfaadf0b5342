"""Application service: Show Order use case (query)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import NotFoundError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order #{order_id} not found")
        return OrderDTO.from_order(order)
