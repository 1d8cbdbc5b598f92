"""Application service: manual stock adjustment from the back office."""

from __future__ import annotations

from studio30.application.dto import StockAdjustmentDTO
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.service.stock_ledger import StockLedger


class AdjustStockHandler:

    def __init__(self, ledger: StockLedger) -> None:
        self._ledger = ledger

    def handle(
        self,
        product_id: int,
        quantity: int,
        color: str,
        size: str,
        direction: str,
    ) -> StockAdjustmentDTO:
        """Reserve (take out) or restore (put back) units of one cell.

        Restoring into a colour or size the product does not have yet
        creates it.
        """
        result = self._ledger.adjust_stock(
            product_id,
            quantity,
            color,
            size,
            direction,
            movement_type=MovementType.MANUAL,
        )
        return StockAdjustmentDTO(
            product_id=result.product.id,
            direction=result.direction.value,
            quantity=result.quantity,
            color=result.color_name,
            size=result.size,
            previous_quantity=result.previous_quantity,
            new_quantity=result.new_quantity,
            total_stock=result.product.stock,
        )
