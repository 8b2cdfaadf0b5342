import click

from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.cli.db_commands import db_init, db_seed
from storefront.infrastructure.cli.order_commands import (
    order_list,
    order_place,
    order_restock,
    order_show,
    order_update,
)
from storefront.infrastructure.cli.product_commands import product_add, product_list, user_add
from storefront.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_check,
    stock_history,
    stock_low,
)
from storefront.infrastructure.config import load_settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Storefront: stock ledger and order placement."""
    if ctx.obj is not None:
        # A caller-supplied Container (tests, embedding) owns its own lifecycle.
        return
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_json)
    container = Container(settings)
    ctx.obj = container
    ctx.call_on_close(container.dispose)


@cli.group()
def db() -> None:
    """Manage the database schema."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def stock() -> None:
    """Manage stock."""


# Register subcommands
db.add_command(db_init)
db.add_command(db_seed)
order.add_command(order_list)
order.add_command(order_place)
order.add_command(order_restock)
order.add_command(order_show)
order.add_command(order_update)
product.add_command(product_add)
product.add_command(product_list)
user.add_command(user_add)
stock.add_command(stock_adjust)
stock.add_command(stock_check)
stock.add_command(stock_history)
stock.add_command(stock_low)
