"""CLI commands for orders: placing, viewing, updating and restocking."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO, OrderItemSpec, PlaceOrderCommand
from storefront.domain.exceptions import DomainException, StockUnavailableError
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import Container


def parse_items(raw: str) -> list[OrderItemSpec]:
    """Turn 'demo-1:3,demo-2:5' into item specs. Empty entries are ignored."""
    items: list[OrderItemSpec] = []
    for entry in filter(None, (part.strip() for part in raw.split(","))):
        product_id, sep, qty_text = entry.rpartition(":")
        if not sep or not product_id.strip():
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Quantity'."
            )
        if not qty_text.strip().lstrip("-").isdigit():
            raise click.BadParameter(
                f"Invalid quantity '{qty_text}' for product '{product_id}'."
            )
        items.append(OrderItemSpec(product_id=product_id.strip(), quantity=int(qty_text)))
    return items


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  {dto.order_number}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>  {dto.customer_phone}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M}")
    if dto.customer_note:
        click.echo(f"Note:     {dto.customer_note}")
    if dto.admin_note:
        click.echo(f"Admin:    {dto.admin_note}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>12} {'Subtotal':>12}")
    click.echo(f"  {'-'*56}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} "
            f"{str(Money(item.unit_price)):>12} {str(Money(item.subtotal)):>12}"
        )
    click.echo(f"  {'-'*56}")
    click.echo(f"  {'Order Total':<30} {str(Money(dto.total_amount)):>26}")


@click.command("place")
@click.option("--user", "user_id", required=True, help="Buyer's user ID.")
@click.option("--phone", required=True, help="Buyer's contact phone.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--note", "customer_note", default=None, help="Customer note.")
@click.option("--admin-note", default=None, help="Internal note.")
@click.pass_obj
def order_place(
    container: Container,
    user_id: str,
    phone: str,
    items: str,
    customer_note: str | None,
    admin_note: str | None,
) -> None:
    """Place an order on behalf of a buyer (decrements stock)."""
    command = PlaceOrderCommand(
        user_id=user_id,
        customer_phone=phone,
        items=parse_items(items),
        customer_note=customer_note,
        admin_note=admin_note,
    )

    try:
        dto = container.place_order().handle(command)
    except StockUnavailableError as exc:
        for check in exc.items:
            click.echo(f"  {check.product_id}: {check.reason}", err=True)
        raise click.ClickException("Stock not available")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(container: Container, order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = container.show_order().handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", default=None, help="New order status.")
@click.option("--payment", "payment_status", default=None, help="New payment status.")
@click.option("--phone", default=None, help="New contact phone.")
@click.option("--note", "customer_note", default=None, help="Customer note.")
@click.option("--admin-note", default=None, help="Internal note.")
@click.pass_obj
def order_update(
    container: Container,
    order_id: int,
    status: str | None,
    payment_status: str | None,
    phone: str | None,
    customer_note: str | None,
    admin_note: str | None,
) -> None:
    """Update an order's status or notes (does not touch stock)."""
    try:
        dto = container.update_order().handle(
            order_id,
            status=status,
            payment_status=payment_status,
            customer_phone=phone,
            customer_note=customer_note,
            admin_note=admin_note,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} updated (status={dto.status}, payment={dto.payment_status}).")


@click.command("restock")
@click.option("--id", "order_id", required=True, type=int, help="Order whose stock to return.")
@click.option("--items", default=None, help="Only these items, as 'ProductId:Qty,...'.")
@click.option("--user", "user_id", default=None, help="Acting admin's user ID.")
@click.pass_obj
def order_restock(
    container: Container,
    order_id: int,
    items: str | None,
    user_id: str | None,
) -> None:
    """Return an order's stock to inventory (compensates a cancelled order)."""
    specs = parse_items(items) if items else None

    try:
        entries = container.cancel_order_stock().handle(order_id, items=specs, user_id=user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for entry in entries:
        click.echo(
            f"{entry.product_name}: +{entry.quantity} "
            f"({entry.before_stock} -> {entry.after_stock})"
        )
    click.echo(f"Stock returned for order #{order_id}.")


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only this buyer's orders.")
@click.pass_obj
def order_list(container: Container, user_id: str | None) -> None:
    """List orders, newest first."""
    orders = container.list_orders().handle(user_id=user_id)

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':>5}  {'Number':<12} {'Customer':<20} {'Status':<11} "
        f"{'Payment':<10} {'Total':>12}  Created"
    )
    click.echo("-" * 92)
    for o in orders:
        click.echo(
            f"{o.id:>5}  {o.order_number:<12} {o.customer_name:<20} {o.status:<11} "
            f"{o.payment_status:<10} {str(Money(o.total_amount)):>12}  "
            f"{o.created_at:%Y-%m-%d %H:%M}"
        )
