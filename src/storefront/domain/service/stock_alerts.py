"""Stock threshold alerts.

Alerts are edge-triggered: they fire when an adjustment crosses a
threshold, not on every adjustment made while already past it.
"""

from __future__ import annotations

from storefront.domain.model.notification import (
    NotificationPriority,
    NotificationType,
    StockAlert,
)
from storefront.domain.model.product import Product


def evaluate_stock_alert(
    product: Product,
    before_stock: int,
    after_stock: int,
    quantity: int,
) -> StockAlert | None:
    """Decide which alert, if any, an adjustment of *quantity* triggers.

    Rules are checked in order and the first match wins:

    1. stock reached zero                       -> OUT_OF_STOCK
    2. stock recovered from exactly zero        -> STOCK_RESTOCK
    3. stock dropped below ``min_stock``, still > 0 -> LOW_STOCK_WARNING
    """
    if after_stock == 0 and before_stock > 0:
        return StockAlert(
            type=NotificationType.OUT_OF_STOCK,
            priority=NotificationPriority.URGENT,
            product_id=product.id,
            product_name=product.name,
            title="Out of stock",
            message=f"'{product.name}' is out of stock. Please restock as soon as possible.",
            payload={
                "productId": product.id,
                "productName": product.name,
                "type": "out_of_stock",
            },
        )

    if after_stock > 0 and before_stock == 0 and quantity > 0:
        return StockAlert(
            type=NotificationType.STOCK_RESTOCK,
            priority=NotificationPriority.NORMAL,
            product_id=product.id,
            product_name=product.name,
            title="Restock completed",
            message=(
                f"'{product.name}' was restocked with {quantity} units; "
                f"current stock: {after_stock}"
            ),
            payload={
                "productId": product.id,
                "productName": product.name,
                "restockAmount": quantity,
                "newStock": after_stock,
                "type": "restock_completed",
            },
        )

    min_stock = product.min_stock
    if 0 < after_stock < min_stock and before_stock >= min_stock:
        return StockAlert(
            type=NotificationType.LOW_STOCK_WARNING,
            priority=NotificationPriority.HIGH,
            product_id=product.id,
            product_name=product.name,
            title="Low stock warning",
            message=(
                f"'{product.name}' is running low: {after_stock} left "
                f"(minimum {min_stock})"
            ),
            payload={
                "productId": product.id,
                "productName": product.name,
                "currentStock": after_stock,
                "minStock": min_stock,
                "type": "stock_warning",
            },
        )

    return None
