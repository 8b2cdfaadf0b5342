"""Abstract notification store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.notification import Notification


class NotificationRepository(ABC):

    @abstractmethod
    def emit(self, notification: Notification) -> None:
        """Hand a notification to the store."""

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Notification]:
        """Return a user's notifications, newest first."""
