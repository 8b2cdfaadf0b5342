"""Tests for catalog and user management."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.add_user import AddUserHandler
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.stock import StockChangeType
from storefront.domain.model.user import UserRole
from storefront.domain.service.stock_ledger import StockLedger
from tests.fakes import InMemoryStore, uow_factory


class TestAddProduct:

    def _setup(self):
        self.store = InMemoryStore()
        self.handler = AddProductHandler(uow_factory(self.store), StockLedger())

    def test_opening_stock_is_a_restock_entry(self):
        self._setup()
        product = self.handler.handle(
            "Widget", "10000", stock=10, min_stock=2, product_id="w1", user_id="admin"
        )

        assert product.stock == 10
        assert product.price == 10000
        (entry,) = self.store.history
        assert entry.change_type is StockChangeType.RESTOCK
        assert (entry.before_stock, entry.after_stock) == (0, 10)
        assert entry.reason == "Opening stock"

    def test_no_entry_without_opening_stock(self):
        self._setup()
        product = self.handler.handle("Widget", 500)

        assert product.stock == 0
        assert len(product.id) == 32
        assert self.store.history == []

    def test_duplicate_id_rejected(self):
        self._setup()
        self.handler.handle("Widget", 500, product_id="w1")
        with pytest.raises(ValidationError, match="already exists"):
            self.handler.handle("Other", 500, product_id="w1")

    @pytest.mark.parametrize("price", [0, "-5", "abc"])
    def test_bad_price_rejected(self, price):
        self._setup()
        with pytest.raises(ValidationError):
            self.handler.handle("Widget", price)

    def test_blank_name_rejected(self):
        self._setup()
        with pytest.raises(ValidationError, match="name is required"):
            self.handler.handle("  ", 500)


class TestAddUser:

    def _setup(self):
        self.store = InMemoryStore()
        self.handler = AddUserHandler(uow_factory(self.store))

    def test_email_is_normalized(self):
        self._setup()
        user = self.handler.handle("Ada", " Ada@Example.com ", admin=True)

        assert user.email == "ada@example.com"
        assert user.role is UserRole.ADMIN
        assert user.id in self.store.users

    def test_duplicate_email_rejected(self):
        self._setup()
        self.handler.handle("Ada", "ada@example.com")
        with pytest.raises(ValidationError, match="already exists"):
            self.handler.handle("Ada Again", "ADA@example.com")

    def test_invalid_email_rejected(self):
        self._setup()
        with pytest.raises(ValidationError, match="e-mail"):
            self.handler.handle("Ada", "not-an-email")
