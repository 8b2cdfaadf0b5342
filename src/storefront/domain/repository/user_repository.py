"""Abstract repository for users."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by e-mail address, or None."""

    @abstractmethod
    def list_admin_ids(self) -> list[str]:
        """Return the IDs of every administrator."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new or updated user."""
