"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money fields stay in
integer minor units; formatting for display is the caller's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockHistoryEntry


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the buyer asked for (product ID + quantity)."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class PlaceOrderCommand:
    user_id: str
    customer_phone: str
    items: list[OrderItemSpec]
    customer_note: str | None = None
    admin_note: str | None = None


@dataclass(frozen=True)
class OrderItemDTO:
    id: int | None
    product_id: str
    product_name: str
    product_image: str | None
    unit_price: int
    quantity: int
    subtotal: int


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_number: str
    user_id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    status: str
    payment_status: str
    total_amount: int
    items: list[OrderItemDTO]
    customer_note: str | None
    admin_note: str | None
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_number=order.order_number,
            user_id=order.user_id,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            status=order.status.value,
            payment_status=order.payment_status.value,
            total_amount=order.total_amount.amount,
            items=[
                OrderItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product_name,
                    product_image=item.product_image,
                    unit_price=item.unit_price.amount,
                    quantity=item.quantity.value,
                    subtotal=item.subtotal.amount,
                )
                for item in order.items
            ],
            customer_note=order.customer_note,
            admin_note=order.admin_note,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: int
    stock: int
    min_stock: int
    is_active: bool
    image_url: str | None = None
    category: str | None = None

    @staticmethod
    def from_product(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=product.price.amount,
            stock=product.stock,
            min_stock=product.min_stock,
            is_active=product.is_active,
            image_url=product.image_url,
            category=product.category,
        )


@dataclass(frozen=True)
class StockHistoryDTO:
    id: int | None
    product_id: str
    product_name: str
    change_type: str
    quantity: int
    before_stock: int
    after_stock: int
    reason: str
    user_id: str | None
    order_id: int | None
    created_at: datetime
    user_name: str | None = None
    user_email: str | None = None
    order_number: str | None = None

    @staticmethod
    def from_entry(entry: StockHistoryEntry) -> StockHistoryDTO:
        return StockHistoryDTO(
            id=entry.id,
            product_id=entry.product_id,
            product_name=entry.product_name,
            change_type=entry.change_type.value,
            quantity=entry.quantity,
            before_stock=entry.before_stock,
            after_stock=entry.after_stock,
            reason=entry.reason,
            user_id=entry.user_id,
            order_id=entry.order_id,
            created_at=entry.created_at,
            user_name=entry.user_name,
            user_email=entry.user_email,
            order_number=entry.order_number,
        )


@dataclass(frozen=True)
class StockAdjustmentDTO:
    """Output of a stock adjustment: the updated product and its ledger line."""

    product: ProductDTO
    history: StockHistoryDTO

