"""CLI commands for schema setup and demo data."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import Container


@click.command("init")
@click.pass_obj
def db_init(container: Container) -> None:
    """Create all tables."""
    container.create_schema()
    click.echo("Database schema created.")


@click.command("seed")
@click.pass_obj
def db_seed(container: Container) -> None:
    """Create the schema and load demo users and products (skips existing ones)."""
    container.create_schema()

    users = [
        ("admin", "Admin", "admin@example.com", True),
        ("buyer", "Demo Buyer", "buyer@example.com", False),
    ]
    for user_id, name, email, admin in users:
        try:
            container.add_user().handle(name=name, email=email, admin=admin, user_id=user_id)
            click.echo(f"Created user: {email}")
        except DomainException as exc:
            click.echo(f"Skipped user {email}: {exc}")

    products = [
        ("demo-1", "Demo product", 100000, 10, 2),
        ("demo-2", "Demo multi-image product", 200000, 5, 1),
    ]
    for product_id, name, price, stock, min_stock in products:
        try:
            container.add_product().handle(
                name=name,
                price=price,
                stock=stock,
                min_stock=min_stock,
                category="Demo",
                user_id="admin",
                product_id=product_id,
            )
            click.echo(f"Created product: {name}")
        except DomainException as exc:
            click.echo(f"Skipped product {name}: {exc}")
