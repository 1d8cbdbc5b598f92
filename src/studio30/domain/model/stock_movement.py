"""StockMovement: one append-only audit row per successful ledger write."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from studio30.domain.model.value_objects import StockDirection


class MovementType(Enum):
    # Values match the ``stock_movements.movement_type`` check constraint.
    SALE = "venda"
    RESERVATION_OUT = "saida_malinha"
    RESERVATION_RESTORE = "retorno_malinha"
    ENTRY = "entrada"
    MANUAL = "ajuste"

    @staticmethod
    def default_for(direction: StockDirection) -> MovementType:
        if direction is StockDirection.RESERVE:
            return MovementType.RESERVATION_OUT
        return MovementType.ENTRY


@dataclass
class StockMovement:
    product_id: int
    quantity: int
    movement_type: MovementType
    notes: str = ""
    order_id: int | None = None
    id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
