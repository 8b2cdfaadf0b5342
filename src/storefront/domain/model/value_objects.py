"""Money and Quantity: the two numbers an order line is built from.

Both are frozen and validate on construction, so a Money or Quantity
that exists is always usable.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Money:
    """Monetary amount in minor currency units (e.g. cents).

    Amounts are plain ints all the way down; only ``__str__`` divides by 100,
    and only for display.
    """

    amount: int
    currency: str = "TWD"

    def __post_init__(self) -> None:
        if not _is_int(self.amount):
            raise ValidationError(
                f"Money amount must be an integer number of minor units, "
                f"got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not _is_int(factor):
            raise TypeError(f"Money can only be scaled by an int, not {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __str__(self) -> str:
        major, minor = divmod(self.amount, 100)
        return f"{major}.{minor:02d}"

    @staticmethod
    def zero(currency: str = "TWD") -> Money:
        return Money(0, currency)

    @staticmethod
    def of(raw: str | int) -> Money:
        """Parse a minor-unit amount typed by an admin ("10000" is 100.00)."""
        try:
            amount = int(str(raw).strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid money amount: {raw!r}") from exc
        return Money(amount)


@dataclass(frozen=True)
class Quantity:
    """How many units of a product an order line holds. Always at least one."""

    value: int

    def __post_init__(self) -> None:
        if not _is_int(self.value):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
