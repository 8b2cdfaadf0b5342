"""Stock ledger records: change taxonomy, adjustment requests, history entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError


class StockChangeType(Enum):
    """Closed taxonomy of the audit trail. Values are persisted verbatim."""

    ADMIN_ADJUST = "ADMIN_ADJUST"
    RESTOCK = "RESTOCK"
    ORDER_PLACED = "ORDER_PLACED"
    ORDER_CANCELLED = "ORDER_CANCELLED"

    @classmethod
    def parse(cls, raw: str) -> StockChangeType:
        try:
            return cls(raw.strip().upper())
        except ValueError as exc:
            allowed = ", ".join(t.value for t in cls)
            raise ValidationError(
                f"Invalid change type {raw!r} (expected one of {allowed})"
            ) from exc


@dataclass(frozen=True)
class StockAdjustment:
    """A validated request to move a product's stock by ``quantity``."""

    product_id: str
    quantity: int
    reason: str
    change_type: StockChangeType
    user_id: str | None = None
    order_id: int | None = None

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValidationError("Product ID is required")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError(
                f"Adjustment quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity == 0:
            raise ValidationError("Adjustment quantity must be non-zero")
        if not self.reason or not self.reason.strip():
            raise ValidationError("Adjustment reason is required")
        if not isinstance(self.change_type, StockChangeType):
            raise ValidationError(f"Invalid change type {self.change_type!r}")


@dataclass(frozen=True)
class StockHistoryEntry:
    """One immutable line of the audit trail.

    ``after_stock - before_stock == quantity`` always holds.
    The actor and order-number fields are filled in when entries are read
    back; the ledger only writes the IDs.
    """

    product_id: str
    product_name: str
    change_type: StockChangeType
    quantity: int
    before_stock: int
    after_stock: int
    reason: str
    user_id: str | None = None
    order_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None
    user_name: str | None = None
    user_email: str | None = None
    order_number: str | None = None
