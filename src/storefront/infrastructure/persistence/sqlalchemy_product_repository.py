"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.orm import ProductRecord


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        record = self._session.get(ProductRecord, product_id)
        return self._to_domain(record) if record is not None else None

    def get_for_update(self, product_id: str) -> Product | None:
        stmt = (
            select(ProductRecord)
            .where(ProductRecord.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        record = self._session.scalars(stmt).one_or_none()
        return self._to_domain(record) if record is not None else None

    def find_by_ids(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        stmt = select(ProductRecord).where(ProductRecord.id.in_(product_ids))
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def find_active(self, product_ids: list[str]) -> list[Product]:
        if not product_ids:
            return []
        stmt = select(ProductRecord).where(
            ProductRecord.id.in_(product_ids),
            ProductRecord.is_active.is_(True),
        )
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def list_low_stock(self) -> list[Product]:
        stmt = (
            select(ProductRecord)
            .where(
                ProductRecord.is_active.is_(True),
                ProductRecord.stock < ProductRecord.min_stock,
            )
            .order_by(ProductRecord.stock.asc(), ProductRecord.name)
        )
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def list_all(self) -> list[Product]:
        stmt = select(ProductRecord).order_by(ProductRecord.name)
        return [self._to_domain(r) for r in self._session.scalars(stmt)]

    def save(self, product: Product) -> None:
        record = self._session.get(ProductRecord, product.id)
        if record is None:
            record = ProductRecord(id=product.id)
            self._session.add(record)
        record.name = product.name
        record.price = product.price.amount
        record.stock = product.stock
        record.min_stock = product.min_stock
        record.is_active = product.is_active
        record.image_url = product.image_url
        record.category = product.category

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(record: ProductRecord) -> Product:
        return Product(
            id=record.id,
            name=record.name,
            price=Money(record.price),
            stock=record.stock,
            min_stock=record.min_stock,
            is_active=record.is_active,
            image_url=record.image_url,
            category=record.category,
        )
