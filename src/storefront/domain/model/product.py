"""Product aggregate.

Products live independently of orders. Prices change and products get
deactivated; orders keep their own snapshot so neither affects history.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock`` is never negative
    - ``min_stock`` is never negative

    Stock only changes through the stock ledger, which records history for
    every change; ``set_stock`` is the ledger's hook and nothing else should
    call it.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    min_stock: int = 0
    is_active: bool = True
    image_url: str | None = None
    category: str | None = None

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {self.stock}")
        if self.min_stock < 0:
            raise ValidationError(
                f"Minimum stock cannot be negative, got {self.min_stock}"
            )

    @property
    def is_low_stock(self) -> bool:
        return self.stock < self.min_stock

    def set_stock(self, new_stock: int) -> None:
        if new_stock < 0:
            raise ValidationError(f"Stock cannot be negative, got {new_stock}")
        self.stock = new_stock

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
