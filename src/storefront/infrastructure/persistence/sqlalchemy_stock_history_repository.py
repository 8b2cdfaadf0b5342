"""SQLAlchemy implementation of StockHistoryRepository (insert and read only)."""

from __future__ import annotations

from dataclasses import replace

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from storefront.domain.model.stock import StockChangeType, StockHistoryEntry
from storefront.domain.repository.stock_history_repository import StockHistoryRepository
from storefront.infrastructure.persistence.orm import (
    OrderRecord,
    StockHistoryRecord,
    UserRecord,
)


class SqlAlchemyStockHistoryRepository(StockHistoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, entry: StockHistoryEntry) -> StockHistoryEntry:
        record = StockHistoryRecord(
            product_id=entry.product_id,
            product_name=entry.product_name,
            change_type=entry.change_type.value,
            quantity=entry.quantity,
            before_stock=entry.before_stock,
            after_stock=entry.after_stock,
            reason=entry.reason,
            user_id=entry.user_id,
            order_id=entry.order_id,
            created_at=entry.created_at,
        )
        self._session.add(record)
        self._session.flush()
        return replace(entry, id=record.id)

    def list_for_product(self, product_id: str, limit: int) -> list[StockHistoryEntry]:
        stmt = (
            self._joined()
            .where(StockHistoryRecord.product_id == product_id)
            .order_by(StockHistoryRecord.created_at.desc(), StockHistoryRecord.id.desc())
            .limit(limit)
        )
        return [self._to_domain(*row) for row in self._session.execute(stmt)]

    def list_for_order(self, order_id: int) -> list[StockHistoryEntry]:
        stmt = (
            self._joined()
            .where(StockHistoryRecord.order_id == order_id)
            .order_by(StockHistoryRecord.id)
        )
        return [self._to_domain(*row) for row in self._session.execute(stmt)]

    @staticmethod
    def _joined() -> Select:
        return (
            select(
                StockHistoryRecord,
                UserRecord.name,
                UserRecord.email,
                OrderRecord.order_number,
            )
            .outerjoin(UserRecord, UserRecord.id == StockHistoryRecord.user_id)
            .outerjoin(OrderRecord, OrderRecord.id == StockHistoryRecord.order_id)
        )

    @staticmethod
    def _to_domain(
        record: StockHistoryRecord,
        user_name: str | None,
        user_email: str | None,
        order_number: str | None,
    ) -> StockHistoryEntry:
        return StockHistoryEntry(
            id=record.id,
            product_id=record.product_id or "",
            product_name=record.product_name,
            change_type=StockChangeType(record.change_type),
            quantity=record.quantity,
            before_stock=record.before_stock,
            after_stock=record.after_stock,
            reason=record.reason,
            user_id=record.user_id,
            order_id=record.order_id,
            created_at=record.created_at,
            user_name=user_name,
            user_email=user_email,
            order_number=order_number,
        )
