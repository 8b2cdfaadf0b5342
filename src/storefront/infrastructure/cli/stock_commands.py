"""CLI commands for the stock ledger."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.domain.model.stock import StockChangeType
from storefront.infrastructure.bootstrap import Container
from storefront.infrastructure.cli.order_commands import parse_items


@click.command("adjust")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Signed change, e.g. 10 or -3.")
@click.option("--reason", required=True, help="Why the stock changed.")
@click.option(
    "--type",
    "change_type",
    type=click.Choice([t.value for t in StockChangeType], case_sensitive=False),
    default=StockChangeType.ADMIN_ADJUST.value,
    show_default=True,
    help="Change type recorded in the history.",
)
@click.option("--user", "user_id", default=None, help="Acting admin's user ID.")
@click.pass_obj
def stock_adjust(
    container: Container,
    product_id: str,
    quantity: int,
    reason: str,
    change_type: str,
    user_id: str | None,
) -> None:
    """Adjust a product's stock and record it in the history."""
    try:
        result = container.adjust_stock().handle(
            product_id=product_id,
            quantity=quantity,
            reason=reason,
            change_type=change_type,
            user_id=user_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    h = result.history
    click.echo(
        f"{result.product.name}: {h.quantity:+d} "
        f"({h.before_stock} -> {h.after_stock}) [{h.change_type}]"
    )


@click.command("history")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--limit", type=int, default=None, help="Number of entries (default from settings).")
@click.pass_obj
def stock_history(container: Container, product_id: str, limit: int | None) -> None:
    """Show a product's stock history, newest first."""
    try:
        entries = container.stock_history().handle(
            product_id, limit or container.settings.history_limit
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No stock history found.")
        return

    click.echo(f"{'When':<17} {'Type':<16} {'Change':>7} {'Before':>7} {'After':>7}  Reason")
    click.echo("-" * 80)
    for e in entries:
        by = f" (by {e.user_name} <{e.user_email}>)" if e.user_name else ""
        click.echo(
            f"{e.created_at:%Y-%m-%d %H:%M} {e.change_type:<16} {e.quantity:>+7d} "
            f"{e.before_stock:>7} {e.after_stock:>7}  {e.reason}{by}"
        )


@click.command("low")
@click.pass_obj
def stock_low(container: Container) -> None:
    """List active products below their minimum stock."""
    products = container.low_stock().handle()

    if not products:
        click.echo("No low-stock products.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Stock':>6} {'Min':>5}")
    click.echo("-" * 72)
    for p in products:
        click.echo(f"{p.id:<34} {p.name:<24} {p.stock:>6} {p.min_stock:>5}")


@click.command("check")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.pass_obj
def stock_check(container: Container, items: str) -> None:
    """Check whether the given items could be ordered right now."""
    try:
        report = container.check_availability().handle(parse_items(items))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for check in report.checks:
        status = "ok" if check.available else f"UNAVAILABLE: {check.reason}"
        click.echo(f"{check.product_id}: {status}")
    click.echo("All available." if report.all_available else "Some items are unavailable.")
