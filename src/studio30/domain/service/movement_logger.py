"""Best-effort audit trail of stock adjustments.

The logger is a side channel: the ledger never reads it back, and a
failure to record a movement is logged and swallowed so it can never undo
or block a stock write that already happened.
"""

from __future__ import annotations

import logging

from studio30.domain.model.stock_movement import MovementType, StockMovement
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)

logger = logging.getLogger(__name__)


class MovementLogger:

    def __init__(self, movement_repo: StockMovementRepository) -> None:
        self._movement_repo = movement_repo

    def record(
        self,
        product_id: int,
        quantity: int,
        movement_type: MovementType,
        notes: str = "",
        order_id: int | None = None,
    ) -> StockMovement | None:
        """Append one movement. Returns None if it could not be stored."""
        movement = StockMovement(
            product_id=product_id,
            quantity=quantity,
            movement_type=movement_type,
            notes=notes,
            order_id=order_id,
        )
        try:
            self._movement_repo.add(movement)
        except Exception:
            logger.exception(
                "Failed to record %s movement of %d for product %s",
                movement_type.value, quantity, product_id,
            )
            return None
        return movement
