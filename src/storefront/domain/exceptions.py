"""Domain-level exceptions.

Every error the stock ledger and the order orchestrator raise derives from
DomainException, so the CLI (or any other outer layer) can catch them in one
place and translate them into user-facing messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.domain.service.stock_availability import ItemCheck


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input, rejected before any I/O."""


class NotFoundError(DomainException):
    """A referenced product, user or order does not exist."""


class InsufficientStockError(DomainException):
    """An adjustment would drive a product's stock below zero."""

    def __init__(self, product_id: str, current_stock: int, requested: int) -> None:
        self.product_id = product_id
        self.current_stock = current_stock
        self.requested = requested
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(current {current_stock}, requested {requested})"
        )


class StockUnavailableError(DomainException):
    """Advisory pre-check failed for one or more order items."""

    def __init__(self, items: list[ItemCheck]) -> None:
        self.items = list(items)
        details = "; ".join(f"{c.product_id}: {c.reason}" for c in self.items)
        super().__init__(f"Stock not available ({details})")


class OrderNumberExhaustedError(DomainException):
    """No unused order number could be generated."""
