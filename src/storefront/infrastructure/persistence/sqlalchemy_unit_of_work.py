"""SQLAlchemy unit of work: one Session, one transaction."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sqlalchemy_notification_repository import (
    SqlAlchemyNotificationRepository,
)
from storefront.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)
from storefront.infrastructure.persistence.sqlalchemy_product_repository import (
    SqlAlchemyProductRepository,
)
from storefront.infrastructure.persistence.sqlalchemy_stock_history_repository import (
    SqlAlchemyStockHistoryRepository,
)
from storefront.infrastructure.persistence.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)


class SqlAlchemyUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        super().__init__()
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlAlchemyProductRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        self.users = SqlAlchemyUserRepository(self._session)
        self.stock_history = SqlAlchemyStockHistoryRepository(self._session)
        self.notifications = SqlAlchemyNotificationRepository(self._session)
        super().__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

    def _commit(self) -> None:
        assert self._session is not None, "unit of work used outside its context"
        self._session.commit()

    def _rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()
