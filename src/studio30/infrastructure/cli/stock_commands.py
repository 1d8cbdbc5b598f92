"""CLI commands for the stock ledger."""

from __future__ import annotations

import json

import click

from studio30.application.adjust_stock import AdjustStockHandler
from studio30.application.import_products import ImportProductsHandler
from studio30.application.show_movements import ShowMovementsHandler
from studio30.application.show_stock import LowStockHandler, ShowStockHandler
from studio30.domain.exceptions import DomainException
from studio30.infrastructure.bootstrap import (
    movement_repository,
    product_repository,
    settings,
    stock_ledger,
)
from studio30.infrastructure.persistence.serialization import product_from_raw


@click.command("adjust")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to move (positive).")
@click.option("--color", required=True, help="Variant color.")
@click.option("--size", required=True, help="Size.")
@click.option(
    "--direction",
    required=True,
    type=click.Choice(["reserve", "restore"]),
    help="reserve takes units out, restore puts them back.",
)
def stock_adjust(product_id: int, quantity: int, color: str, size: str, direction: str) -> None:
    """Manually move stock of one color/size cell."""
    handler = AdjustStockHandler(stock_ledger())

    try:
        dto = handler.handle(product_id, quantity, color, size, direction)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{dto.product_id} {dto.color}/{dto.size}: "
        f"{dto.previous_quantity} -> {dto.new_quantity} (total stock {dto.total_stock})"
    )


@click.command("show")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
def stock_show(product_id: int) -> None:
    """Show the color/size breakdown of a product's stock."""
    handler = ShowStockHandler(product_repository())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.product_id} {dto.name}  (default color: {dto.default_color or '-'})")
    click.echo(f"  {'Color':<16} {'Size':<8} {'Qty':>5}")
    click.echo(f"  {'-'*31}")
    for cell in dto.cells:
        click.echo(f"  {cell.color:<16} {cell.size:<8} {cell.quantity:>5}")
    click.echo(f"  {'-'*31}")
    click.echo(f"  {'Total':<25} {dto.total:>5}")


@click.command("low")
@click.option("--limit", default=10, show_default=True, type=int, help="Max products listed.")
def stock_low(limit: int) -> None:
    """List products whose stock is at or below the low-stock threshold."""
    handler = LowStockHandler(product_repository(), settings().low_stock_threshold)
    products = handler.handle(limit=limit)

    if not products:
        click.echo("No products with low stock.")
        return

    click.echo(f"{'ID':<6} {'Name':<30} {'Stock':>6}")
    click.echo("-" * 44)
    for p in products:
        click.echo(f"{p.product_id:<6} {p.name:<30} {p.total:>6}")


@click.command("movements")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
def stock_movements(product_id: int) -> None:
    """Show the stock movement history of a product, newest first."""
    handler = ShowMovementsHandler(movement_repository())

    try:
        movements = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not movements:
        click.echo("No movements recorded.")
        return

    for m in movements:
        order = f" order #{m.order_id}" if m.order_id is not None else ""
        click.echo(f"{m.created_at}  {m.movement_type:<16} {m.quantity:>4}{order}  {m.notes}")


@click.command("import")
@click.option(
    "--file", "file_path", required=True,
    type=click.Path(exists=True, dir_okay=False), help="JSON array of products.",
)
def stock_import(file_path: str) -> None:
    """Add products (with their color/size stock) from a JSON file."""
    try:
        with open(file_path, encoding="utf-8") as fh:
            rows = json.load(fh)
        products = [product_from_raw(row) for row in rows]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as exc:
        raise click.ClickException(f"Invalid product file {file_path}: {exc}")

    handler = ImportProductsHandler(product_repository())
    try:
        result = handler.handle(products)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Imported {len(result.added)} product(s).")
    if result.skipped:
        click.echo(f"Already stored, skipped: {', '.join(str(i) for i in result.skipped)}")
