"""Application service: Add User use case."""

from __future__ import annotations

import uuid
from typing import Callable

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import User, UserRole
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddUserHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        email: str,
        admin: bool = False,
        user_id: str | None = None,
    ) -> User:
        if not name or not name.strip():
            raise ValidationError("User name is required")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid e-mail address: {email!r}")

        user = User(
            id=user_id or uuid.uuid4().hex,
            name=name.strip(),
            email=email.strip().lower(),
            role=UserRole.ADMIN if admin else UserRole.USER,
        )

        with self._uow_factory() as uow:
            if uow.users.get_by_email(user.email) is not None:
                raise ValidationError(f"User '{user.email}' already exists")
            uow.users.save(user)
            uow.commit()

        return user
