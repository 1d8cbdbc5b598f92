"""CLI commands for the relational store."""

from __future__ import annotations

import click

from studio30.domain.exceptions import DomainException
from studio30.infrastructure.bootstrap import init_database


@click.command("init")
def db_init() -> None:
    """Create the products and stock_movements tables if missing."""
    try:
        url = init_database()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Schema ready at {url}")
