"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_for_update(self, product_id: str) -> Product | None:
        """Return a product and hold a row lock on it until the transaction ends."""

    @abstractmethod
    def find_by_ids(self, product_ids: list[str]) -> list[Product]:
        """Return the products among *product_ids* that exist, active or not."""

    @abstractmethod
    def find_active(self, product_ids: list[str]) -> list[Product]:
        """Return the active products among *product_ids*."""

    @abstractmethod
    def list_low_stock(self) -> list[Product]:
        """Return active products with ``stock < min_stock``, lowest stock first."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
