"""Order aggregate.

The Order is an aggregate root that owns its line items. Orders are paid
for up front (group purchasing), so a new order starts out PAID with a
COMPLETED payment and moves forward from there.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PAID = "PAID"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class PaymentStatus(Enum):
    COMPLETED = "COMPLETED"
    REFUNDED = "REFUNDED"


# Forward order of the lifecycle; CANCELLED sits outside it.
_LIFECYCLE = [
    OrderStatus.PAID,
    OrderStatus.CONFIRMED,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
]
_TERMINAL = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class OrderItem:
    """Snapshot of a product at order-creation time.

    Name, image and unit price are copied, not referenced, so the order
    stays accurate when the product is later renamed or repriced.
    """

    product_id: str
    product_name: str
    unit_price: Money  # locked at order-creation time
    quantity: Quantity
    product_image: str | None = None
    id: int | None = None

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders; it enforces the creation rules
    and freezes ``total_amount``. The ``__init__`` stays simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    user_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    items: list[OrderItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PAID
    payment_status: PaymentStatus = PaymentStatus.COMPLETED
    customer_note: str | None = None
    admin_note: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_number: str,
        customer: User,
        customer_phone: str,
        items: list[OrderItem],
        customer_note: str | None = None,
        admin_note: str | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not order_number:
            raise ValidationError("Order number is required")
        if not customer_phone or not customer_phone.strip():
            raise ValidationError("Customer phone is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero(items[0].unit_price.currency)
        for item in items:
            total = total + item.subtotal

        return Order(
            id=None,
            order_number=order_number,
            user_id=customer.id,
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer_phone.strip(),
            items=list(items),
            total_amount=total,
            customer_note=customer_note,
            admin_note=admin_note,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Move the order along its lifecycle, or cancel it.

        Stock is not touched here; restoring stock for a cancelled order
        is a separate, explicit operation.
        """
        if new_status == self.status:
            return
        if self.status in _TERMINAL:
            raise ValidationError(
                f"Cannot change status of a {self.status.value} order"
            )
        if new_status is not OrderStatus.CANCELLED and (
            _LIFECYCLE.index(new_status) < _LIFECYCLE.index(self.status)
        ):
            raise ValidationError(
                f"Cannot move order from {self.status.value} back to {new_status.value}"
            )
        self.status = new_status
        self.touch()

    def cancel(self) -> None:
        self.change_status(OrderStatus.CANCELLED)

    def change_payment_status(self, new_status: PaymentStatus) -> None:
        self.payment_status = new_status
        self.touch()

    def update_contact(
        self,
        customer_phone: str | None = None,
        customer_note: str | None = None,
        admin_note: str | None = None,
    ) -> None:
        if customer_phone is not None:
            if not customer_phone.strip():
                raise ValidationError("Customer phone cannot be blank")
            self.customer_phone = customer_phone.strip()
        if customer_note is not None:
            self.customer_note = customer_note
        if admin_note is not None:
            self.admin_note = admin_note
        self.touch()

    def touch(self) -> None:
        self.updated_at = _utcnow()
