"""Application service: Update Order use case (admin back office)."""

from __future__ import annotations

from typing import Callable

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import NotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus, PaymentStatus
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        order_id: int,
        status: str | None = None,
        payment_status: str | None = None,
        customer_phone: str | None = None,
        customer_note: str | None = None,
        admin_note: str | None = None,
    ) -> OrderDTO:
        """Update status, payment status and notes of an order.

        Changing status never touches stock; see CancelOrderStockHandler.
        """
        new_status = self._parse(OrderStatus, status, "order status")
        new_payment = self._parse(PaymentStatus, payment_status, "payment status")

        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            if new_status is not None:
                order.change_status(new_status)
            if new_payment is not None:
                order.change_payment_status(new_payment)
            order.update_contact(
                customer_phone=customer_phone,
                customer_note=customer_note,
                admin_note=admin_note,
            )

            uow.orders.save(order)
            uow.commit()

        return OrderDTO.from_order(order)

    @staticmethod
    def _parse(enum_cls, raw: str | None, label: str):
        if raw is None:
            return None
        try:
            return enum_cls(raw.strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Invalid {label}: {raw!r}") from exc
