"""Abstract repository for the append-only stock history."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.stock import StockHistoryEntry


class StockHistoryRepository(ABC):

    @abstractmethod
    def add(self, entry: StockHistoryEntry) -> StockHistoryEntry:
        """Append an entry and return it with its ID assigned."""

    @abstractmethod
    def list_for_product(self, product_id: str, limit: int) -> list[StockHistoryEntry]:
        """Return the newest *limit* entries for a product, newest first."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[StockHistoryEntry]:
        """Return every entry that references an order, oldest first."""
