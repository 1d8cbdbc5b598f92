"""CLI commands for orders and malinhas."""

from __future__ import annotations

import click

from studio30.application.create_order import CreateOrderHandler
from studio30.application.delete_order import DeleteOrderHandler
from studio30.application.dto import OrderDTO
from studio30.application.malinha import ActivateMalinhaHandler, ReturnMalinhaHandler
from studio30.application.show_order import ShowOrderHandler
from studio30.application.update_order import UpdateOrderHandler
from studio30.domain.exceptions import DomainException
from studio30.infrastructure.bootstrap import batch_service, order_repository
from studio30.infrastructure.cli.items import parse_items


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    stock_note = "holds stock" if dto.holds_stock else "no stock held"
    click.echo(f"Order #{dto.id}  (status={dto.status}, {stock_note})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':>7} {'Color':<12} {'Size':<6} {'Qty':>4} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*58}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:>7} {item.color:<12} {item.size:<6} {item.quantity:>4} "
            f"{item.unit_price:>12} {item.line_total:>12}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Order Total':<33} {dto.total:>25}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'ID:QTY:COLOR:SIZE:PRICE,...'.")
@click.option("--status", default="pending", show_default=True, help="Initial status.")
def order_create(customer: str, items: str, status: str) -> None:
    """Create an order (reserves stock when its status holds stock)."""
    specs = parse_items(items)
    handler = CreateOrderHandler(order_repository(), batch_service())

    try:
        dto = handler.handle(customer_name=customer, item_specs=specs, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--items", default=None, help="New items as 'ID:QTY:COLOR:SIZE:PRICE,...'.")
@click.option("--status", default=None, help="New status.")
def order_update(order_id: int, items: str | None, status: str | None) -> None:
    """Replace an order's items and/or status, moving stock accordingly."""
    if items is None and status is None:
        raise click.ClickException("Nothing to update: pass --items and/or --status")

    specs = parse_items(items) if items is not None else None
    handler = UpdateOrderHandler(order_repository(), batch_service())

    try:
        dto = handler.handle(order_id, item_specs=specs, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Delete an order, giving its stock back."""
    handler = DeleteOrderHandler(order_repository(), batch_service())

    try:
        summary = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted, {len(summary.released)} item(s) restored.")
    for error in summary.errors:
        click.echo(f"  warning: {error}", err=True)


@click.command("activate")
@click.option("--id", "order_id", required=True, type=int, help="Malinha (order) ID.")
def order_activate(order_id: int) -> None:
    """Send a pending malinha out to the customer."""
    handler = ActivateMalinhaHandler(order_repository(), batch_service())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Malinha #{order_id} is now active.")


@click.command("return")
@click.option("--id", "order_id", required=True, type=int, help="Malinha (order) ID.")
def order_return(order_id: int) -> None:
    """Take a malinha back, restoring its garments to stock."""
    handler = ReturnMalinhaHandler(order_repository(), batch_service())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Malinha #{order_id} returned, stock restored.")
