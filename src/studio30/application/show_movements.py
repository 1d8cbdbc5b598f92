"""Application service: stock movement history of a product (query)."""

from __future__ import annotations

from studio30.application.dto import MovementDTO
from studio30.application.show_order import format_utc
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)


class ShowMovementsHandler:

    def __init__(self, movement_repo: StockMovementRepository) -> None:
        self._movement_repo = movement_repo

    def handle(self, product_id: int) -> list[MovementDTO]:
        return [
            MovementDTO(
                created_at=format_utc(m.created_at),
                movement_type=m.movement_type.value,
                quantity=m.quantity,
                notes=m.notes,
                order_id=m.order_id,
            )
            for m in self._movement_repo.list_for_product(product_id)
        ]
