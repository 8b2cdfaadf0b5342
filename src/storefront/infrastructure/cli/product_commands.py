"""CLI commands for the product catalog and users."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import Container


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price in minor units (e.g. 10000 for 100.00).")
@click.option("--stock", default=0, show_default=True, type=int, help="Opening stock.")
@click.option("--min-stock", default=0, show_default=True, type=int, help="Low-stock threshold.")
@click.option("--image", "image_url", default=None, help="Image URL.")
@click.option("--category", default=None, help="Category.")
@click.option("--id", "product_id", default=None, help="Explicit product ID.")
@click.pass_obj
def product_add(
    container: Container,
    name: str,
    price: str,
    stock: int,
    min_stock: int,
    image_url: str | None,
    category: str | None,
    product_id: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = container.add_product()

    try:
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            min_stock=min_stock,
            image_url=image_url,
            category=category,
            product_id=product_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {product.id} '{product.name}' added at {Money(product.price)} "
        f"(stock {product.stock})"
    )


@click.command("list")
@click.pass_obj
def product_list(container: Container) -> None:
    """List all products in the catalog."""
    with container.unit_of_work() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Price':>10} {'Stock':>6} {'Min':>5} {'Active':>7}")
    click.echo("-" * 91)
    for p in products:
        click.echo(
            f"{p.id:<34} {p.name:<24} {str(p.price):>10} {p.stock:>6} "
            f"{p.min_stock:>5} {'yes' if p.is_active else 'no':>7}"
        )


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="E-mail address.")
@click.option("--admin", is_flag=True, default=False, help="Grant the administrator role.")
@click.option("--id", "user_id", default=None, help="Explicit user ID.")
@click.pass_obj
def user_add(container: Container, name: str, email: str, admin: bool, user_id: str | None) -> None:
    """Add a user."""
    try:
        created = container.add_user().handle(name=name, email=email, admin=admin, user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {created.id} <{created.email}> added ({created.role.value})")
