"""Parsing of the ``--items`` option shared by order and sale commands."""

from __future__ import annotations

import click

from studio30.application.dto import LineItemSpec


def parse_items(raw: str) -> list[LineItemSpec]:
    """Parse 'ID:QTY[:COLOR[:SIZE[:PRICE]]],...' into LineItemSpec list.

    Example: '10:2:Preto:M:89.90,11:1:Verde:P'
    """
    specs: list[LineItemSpec] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = [p.strip() for p in chunk.split(":")]
        if len(parts) < 2 or len(parts) > 5:
            raise click.BadParameter(
                f"Invalid item format '{chunk}'. Expected 'ID:QTY[:COLOR[:SIZE[:PRICE]]]'."
            )
        try:
            product_id = int(parts[0])
            qty = int(parts[1])
        except ValueError:
            raise click.BadParameter(
                f"Invalid product ID or quantity in '{chunk}'."
            )
        specs.append(
            LineItemSpec(
                product_id=product_id,
                quantity=qty,
                color=parts[2] if len(parts) > 2 and parts[2] else None,
                size=parts[3] if len(parts) > 3 and parts[3] else None,
                price=parts[4] if len(parts) > 4 and parts[4] else "0",
            )
        )
    if not specs:
        raise click.BadParameter("At least one item is required.")
    return specs
