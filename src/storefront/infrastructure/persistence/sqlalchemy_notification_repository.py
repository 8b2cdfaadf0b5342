"""SQLAlchemy-backed notification store."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.notification import (
    Notification,
    NotificationPriority,
    NotificationType,
)
from storefront.domain.repository.notification_repository import NotificationRepository
from storefront.infrastructure.persistence.orm import NotificationRecord


class SqlAlchemyNotificationRepository(NotificationRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def emit(self, notification: Notification) -> None:
        self._session.add(
            NotificationRecord(
                user_id=notification.user_id,
                type=notification.type.value,
                title=notification.title,
                message=notification.message,
                data=notification.data or None,
                priority=notification.priority.value,
                is_read=notification.is_read,
                created_at=notification.created_at,
            )
        )

    def list_for_user(self, user_id: str) -> list[Notification]:
        stmt = (
            select(NotificationRecord)
            .where(NotificationRecord.user_id == user_id)
            .order_by(NotificationRecord.created_at.desc(), NotificationRecord.id.desc())
        )
        return [
            Notification(
                id=r.id,
                user_id=r.user_id,
                type=NotificationType(r.type),
                title=r.title,
                message=r.message,
                data=r.data or {},
                priority=NotificationPriority(r.priority),
                is_read=r.is_read,
                created_at=r.created_at,
            )
            for r in self._session.scalars(stmt)
        ]
