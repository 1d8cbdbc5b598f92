import click

from studio30.infrastructure.bootstrap import settings
from studio30.infrastructure.cli.db_commands import db_init
from studio30.infrastructure.cli.order_commands import (
    order_activate,
    order_create,
    order_delete,
    order_return,
    order_show,
    order_update,
)
from studio30.infrastructure.cli.sale_commands import sale_create
from studio30.infrastructure.cli.stock_commands import (
    stock_adjust,
    stock_import,
    stock_low,
    stock_movements,
    stock_show,
)
from studio30.infrastructure.logging import setup_logging


@click.group()
@click.option("--log-level", default=None, help="Override STUDIO30_LOG_LEVEL.")
def cli(log_level: str | None) -> None:
    """Studio 30 stock, orders and sales back office."""
    setup_logging(log_level or settings().log_level)


@cli.group()
def stock() -> None:
    """Inspect and adjust stock."""


@cli.group()
def order() -> None:
    """Manage orders and malinhas."""


@cli.group()
def sale() -> None:
    """Register sales."""


@cli.group()
def db() -> None:
    """Prepare the database (when STUDIO30_DATABASE_URL is set)."""


# Register subcommands
stock.add_command(stock_adjust)
stock.add_command(stock_show)
stock.add_command(stock_low)
stock.add_command(stock_movements)
stock.add_command(stock_import)
order.add_command(order_create)
order.add_command(order_show)
order.add_command(order_update)
order.add_command(order_delete)
order.add_command(order_activate)
order.add_command(order_return)
sale.add_command(sale_create)
db.add_command(db_init)
