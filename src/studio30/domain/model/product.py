"""Product aggregate with its colour variants and per-size stock cells.

A product owns an ordered list of variants; each variant owns an ordered
list of ``SizeStock`` cells. The ``stock`` field is a denormalized cache of
the sum of every cell and is recomputed on every ledger write, never set
independently.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from datetime import datetime

from studio30.domain.exceptions import ValidationError


@dataclass
class SizeStock:
    """The smallest unit of trackable inventory: one (colour, size) cell."""

    size: str
    quantity: int = 0


@dataclass
class Variant:
    color_name: str
    images: list[str] = field(default_factory=list)
    size_stock: list[SizeStock] = field(default_factory=list)

    @property
    def total_quantity(self) -> int:
        return sum(cell.quantity for cell in self.size_stock)

    @property
    def sizes(self) -> list[str]:
        return [cell.size for cell in self.size_stock]


@dataclass
class Product:
    """Aggregate root for catalog items and their inventory.

    ``version`` is the optimistic-concurrency token: repositories only
    accept a write whose ``version`` still matches the stored one, and bump
    it on success.
    """

    id: int
    name: str
    color: str = ""
    variants: list[Variant] = field(default_factory=list)
    stock: int = 0
    version: int = 0
    updated_at: datetime | None = None

    @property
    def color_names(self) -> list[str]:
        return [v.color_name for v in self.variants]

    def computed_stock(self) -> int:
        return sum(v.total_quantity for v in self.variants)

    def recompute_stock(self) -> int:
        """Refresh the denormalized ``stock`` total and return it."""
        self.stock = self.computed_stock()
        return self.stock

    def check_invariants(self) -> None:
        for variant in self.variants:
            for cell in variant.size_stock:
                if cell.quantity < 0:
                    raise ValidationError(
                        f"Negative stock for {self.name} "
                        f"({variant.color_name}/{cell.size}): {cell.quantity}"
                    )
        if self.stock != self.computed_stock():
            raise ValidationError(
                f"Stock total {self.stock} of {self.name} does not match "
                f"the sum of its variants ({self.computed_stock()})"
            )

    def clone(self) -> Product:
        """Full deep copy; ledger mutations never touch the loaded instance."""
        return copy.deepcopy(self)
