"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import exists, select
from sqlalchemy.orm import Session, selectinload

from storefront.domain.model.order import Order, OrderItem, OrderStatus, PaymentStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.orm import OrderItemRecord, OrderRecord


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        stmt = (
            select(OrderRecord)
            .where(OrderRecord.id == order_id)
            .options(selectinload(OrderRecord.items))
        )
        record = self._session.scalars(stmt).one_or_none()
        return self._to_domain(record) if record is not None else None

    def order_number_exists(self, order_number: str) -> bool:
        stmt = select(exists().where(OrderRecord.order_number == order_number))
        return bool(self._session.scalar(stmt))

    def list_all(self, user_id: str | None = None) -> list[Order]:
        stmt = (
            select(OrderRecord)
            .options(selectinload(OrderRecord.items))
            .order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc())
        )
        if user_id is not None:
            stmt = stmt.where(OrderRecord.user_id == user_id)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def save(self, order: Order) -> None:
        if order.id is None:
            record = OrderRecord(
                order_number=order.order_number,
                user_id=order.user_id,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                total_amount=order.total_amount.amount,
                created_at=order.created_at,
                items=[self._item_to_record(item) for item in order.items],
            )
            self._session.add(record)
        else:
            record = self._session.get(OrderRecord, order.id)
            if record is None:
                raise LookupError(f"Order #{order.id} vanished before save")

        # Items and total are frozen at creation; only these fields change later.
        record.customer_phone = order.customer_phone
        record.status = order.status.value
        record.payment_status = order.payment_status.value
        record.customer_note = order.customer_note
        record.admin_note = order.admin_note
        record.updated_at = order.updated_at

        if order.id is None:
            self._session.flush()
            order.id = record.id
            order.items = [
                OrderItem(
                    id=item_record.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    product_image=item.product_image,
                    unit_price=item.unit_price,
                    quantity=item.quantity,
                )
                for item, item_record in zip(order.items, record.items)
            ]

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _item_to_record(item: OrderItem) -> OrderItemRecord:
        return OrderItemRecord(
            product_id=item.product_id,
            product_name=item.product_name,
            product_image=item.product_image,
            unit_price=item.unit_price.amount,
            quantity=item.quantity.value,
            subtotal=item.subtotal.amount,
        )

    @staticmethod
    def _to_domain(record: OrderRecord) -> Order:
        return Order(
            id=record.id,
            order_number=record.order_number,
            user_id=record.user_id,
            customer_name=record.customer_name,
            customer_email=record.customer_email,
            customer_phone=record.customer_phone,
            items=[
                OrderItem(
                    id=i.id,
                    product_id=i.product_id,
                    product_name=i.product_name,
                    product_image=i.product_image,
                    unit_price=Money(i.unit_price),
                    quantity=Quantity(i.quantity),
                )
                for i in record.items
            ],
            total_amount=Money(record.total_amount),
            status=OrderStatus(record.status),
            payment_status=PaymentStatus(record.payment_status),
            customer_note=record.customer_note,
            admin_note=record.admin_note,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )
