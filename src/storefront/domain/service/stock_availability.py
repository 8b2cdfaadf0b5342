"""Domain service: batch stock availability pre-check.

This is an advisory read. It takes no locks and reserves nothing, so the
answer can be stale by the time an order is placed; the ledger's
decrement inside the order transaction is what actually guards stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class ItemCheck:
    product_id: str
    available: bool
    reason: str | None = None
    current_stock: int | None = None
    requested_quantity: int | None = None


@dataclass(frozen=True)
class AvailabilityReport:
    checks: list[ItemCheck] = field(default_factory=list)

    @property
    def all_available(self) -> bool:
        return all(check.available for check in self.checks)

    @property
    def unavailable_items(self) -> list[ItemCheck]:
        return [check for check in self.checks if not check.available]


class StockAvailabilityChecker:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check(self, requests: list[tuple[str, int]]) -> AvailabilityReport:
        """Check each ``(product_id, quantity)`` pair against current stock."""
        ids = list(dict.fromkeys(product_id for product_id, _ in requests))
        products = {p.id: p for p in self._product_repo.find_by_ids(ids)}

        checks: list[ItemCheck] = []
        for product_id, quantity in requests:
            product = products.get(product_id)
            if product is None:
                checks.append(
                    ItemCheck(product_id, False, reason="Product does not exist")
                )
            elif not product.is_active:
                checks.append(
                    ItemCheck(product_id, False, reason="Product is no longer available")
                )
            elif product.stock < quantity:
                checks.append(
                    ItemCheck(
                        product_id,
                        False,
                        reason=(
                            f"Insufficient stock: requested {quantity}, "
                            f"only {product.stock} left"
                        ),
                        current_stock=product.stock,
                        requested_quantity=quantity,
                    )
                )
            else:
                checks.append(
                    ItemCheck(
                        product_id,
                        True,
                        current_stock=product.stock,
                        requested_quantity=quantity,
                    )
                )

        return AvailabilityReport(checks)
