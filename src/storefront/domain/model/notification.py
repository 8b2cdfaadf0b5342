"""Notifications handed to the notification store.

Only the stock kinds are produced by this core; the rest of the
taxonomy exists because the store is shared with order and chat features.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class NotificationType(Enum):
    ORDER_STATUS_CHANGED = "ORDER_STATUS_CHANGED"
    ORDER_SHIPPED = "ORDER_SHIPPED"
    ORDER_DELIVERED = "ORDER_DELIVERED"
    NEW_MESSAGE = "NEW_MESSAGE"
    LOW_STOCK_WARNING = "LOW_STOCK_WARNING"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    STOCK_RESTOCK = "STOCK_RESTOCK"
    SYSTEM_ANNOUNCEMENT = "SYSTEM_ANNOUNCEMENT"
    ACCOUNT_SECURITY = "ACCOUNT_SECURITY"


class NotificationPriority(Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"


@dataclass(frozen=True)
class StockAlert:
    """A decided, not yet delivered, stock threshold notification."""

    type: NotificationType
    priority: NotificationPriority
    product_id: str
    product_name: str
    title: str
    message: str
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Notification:
    user_id: str
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    priority: NotificationPriority = NotificationPriority.NORMAL
    is_read: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: int | None = None

    @staticmethod
    def for_alert(user_id: str, alert: StockAlert) -> Notification:
        return Notification(
            user_id=user_id,
            type=alert.type,
            title=alert.title,
            message=alert.message,
            data=dict(alert.payload),
            priority=alert.priority,
        )
