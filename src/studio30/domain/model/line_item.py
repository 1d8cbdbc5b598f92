"""LineItem: one garment selection inside an order or a sale."""

from __future__ import annotations

from dataclasses import dataclass

from studio30.domain.model.value_objects import Money, Quantity

# Placeholder colour used by the storefront when no colour was picked.
GENERIC_COLOR = "Padrão"
# Placeholder size for one-size garments.
ONE_SIZE = "Único"


@dataclass(frozen=True)
class LineItem:
    """Captures what was selected and the price at the time.

    ``selected_color`` and ``selected_size`` are free text as typed or
    picked by the customer; they are normalized only when the stock
    ledger resolves them to a cell.
    """

    product_id: int
    quantity: Quantity
    selected_color: str | None = None
    selected_size: str | None = None
    unit_price: Money = Money.zero()

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    @property
    def color_or_generic(self) -> str:
        return self.selected_color or GENERIC_COLOR

    @property
    def touches_stock(self) -> bool:
        """Only items with a chosen size are tracked by the ledger."""
        return bool(self.selected_size and self.selected_size.strip())
