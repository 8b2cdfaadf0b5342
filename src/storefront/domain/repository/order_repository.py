"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def order_number_exists(self, order_number: str) -> bool:
        """True if an order already uses *order_number*."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        New orders (``id is None``) get their ID assigned immediately, so
        ledger entries written later in the same transaction can point at it.
        """

    @abstractmethod
    def list_all(self, user_id: str | None = None) -> list[Order]:
        """Return orders newest first, only *user_id*'s when given."""
