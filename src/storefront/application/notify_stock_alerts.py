"""Application service: deliver stock alerts to administrators.

Runs as a post-commit hook of the transaction that moved the stock, in a
transaction of its own. Delivery is best effort: any failure is logged
and swallowed, never surfaced to the stock or order operation that
triggered it.
"""

from __future__ import annotations

from typing import Callable

import structlog

from storefront.domain.model.notification import Notification, StockAlert
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class StockAlertNotifier:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def notify(self, alerts: list[StockAlert]) -> int:
        """Fan *alerts* out to every admin; return how many notifications were stored."""
        if not alerts:
            return 0
        try:
            with self._uow_factory() as uow:
                # One admin lookup per batch, however many alerts it holds.
                admin_ids = uow.users.list_admin_ids()
                for alert in alerts:
                    for admin_id in admin_ids:
                        uow.notifications.emit(Notification.for_alert(admin_id, alert))
                uow.commit()
        except Exception:
            logger.exception(
                "stock_alert_delivery_failed",
                alerts=[(a.type.value, a.product_id) for a in alerts],
            )
            return 0

        sent = len(alerts) * len(admin_ids)
        for alert in alerts:
            logger.info(
                "stock_alert_sent",
                type=alert.type.value,
                product_id=alert.product_id,
                recipients=len(admin_ids),
            )
        return sent
