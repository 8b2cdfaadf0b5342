"""Application service: Add Product use case.

Opening stock goes through the ledger as a RESTOCK entry, so the audit
trail accounts for every unit from the start.
"""

from __future__ import annotations

import uuid
from typing import Callable

from storefront.application.dto import ProductDTO
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.stock import StockAdjustment, StockChangeType
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_ledger import StockLedger


class AddProductHandler:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        ledger: StockLedger,
    ) -> None:
        self._uow_factory = uow_factory
        self._ledger = ledger

    def handle(
        self,
        name: str,
        price: str | int,
        stock: int = 0,
        min_stock: int = 0,
        image_url: str | None = None,
        category: str | None = None,
        user_id: str | None = None,
        product_id: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=product_id or uuid.uuid4().hex,
            name=name.strip(),
            price=money,
            stock=0,
            min_stock=min_stock,
            image_url=image_url,
            category=category,
        )

        with self._uow_factory() as uow:
            if uow.products.get_by_id(product.id) is not None:
                raise ValidationError(f"Product '{product.id}' already exists")
            uow.products.save(product)
            if stock > 0:
                product = self._ledger.adjust(
                    uow,
                    StockAdjustment(
                        product_id=product.id,
                        quantity=stock,
                        reason="Opening stock",
                        change_type=StockChangeType.RESTOCK,
                        user_id=user_id,
                    ),
                ).product
            uow.commit()

        return ProductDTO.from_product(product)
