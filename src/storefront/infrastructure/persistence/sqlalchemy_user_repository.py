"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.user import User, UserRole
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence.orm import UserRecord


class SqlAlchemyUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: str) -> User | None:
        record = self._session.get(UserRecord, user_id)
        return self._to_domain(record) if record is not None else None

    def get_by_email(self, email: str) -> User | None:
        stmt = select(UserRecord).where(UserRecord.email == email.strip().lower())
        record = self._session.scalars(stmt).one_or_none()
        return self._to_domain(record) if record is not None else None

    def list_admin_ids(self) -> list[str]:
        stmt = (
            select(UserRecord.id)
            .where(UserRecord.role == UserRole.ADMIN.value)
            .order_by(UserRecord.id)
        )
        return list(self._session.scalars(stmt))

    def save(self, user: User) -> None:
        record = self._session.get(UserRecord, user.id)
        if record is None:
            record = UserRecord(id=user.id)
            self._session.add(record)
        record.name = user.name
        record.email = user.email
        record.role = user.role.value

    @staticmethod
    def _to_domain(record: UserRecord) -> User:
        return User(
            id=record.id,
            name=record.name,
            email=record.email,
            role=UserRole(record.role),
        )
