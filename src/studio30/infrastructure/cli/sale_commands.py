"""CLI commands for sales (vendas)."""

from __future__ import annotations

import click

from studio30.application.create_sale import CreateSaleHandler
from studio30.domain.exceptions import DomainException
from studio30.domain.model.sale import PAYMENT_METHODS
from studio30.infrastructure.bootstrap import batch_service, sale_repository
from studio30.infrastructure.cli.items import parse_items


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--items", required=True, help="Items as 'ID:QTY:COLOR:SIZE:PRICE,...'.")
@click.option(
    "--payment",
    "payment_method",
    required=True,
    type=click.Choice(sorted(PAYMENT_METHODS)),
    help="Payment method.",
)
@click.option("--order-id", type=int, default=None, help="Malinha the sale came from.")
def sale_create(customer: str, items: str, payment_method: str, order_id: int | None) -> None:
    """Register a sale (takes its items out of stock)."""
    handler = CreateSaleHandler(sale_repository(), batch_service())

    try:
        dto = handler.handle(
            customer_name=customer,
            item_specs=parse_items(items),
            payment_method=payment_method,
            order_id=order_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{dto.id} registered ({dto.payment_method}), total {dto.total}")
