"""Application service: Delete Order use case.

Gives the order's stock back (if it held any) before removing it.
Restoring is tolerant: an item that cannot be restored is reported in the
summary but does not stop the deletion.
"""

from __future__ import annotations

from studio30.domain.exceptions import EntityNotFoundError
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.repository.order_repository import OrderRepository
from studio30.domain.service.stock_batch_service import (
    ReleaseSummary,
    StockBatchService,
)


class DeleteOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_service: StockBatchService,
    ) -> None:
        self._order_repo = order_repo
        self._batch_service = batch_service

    def handle(self, order_id: int) -> ReleaseSummary:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        summary = ReleaseSummary()
        if order.holds_stock:
            summary = self._batch_service.release_items(
                order.items,
                movement_type=MovementType.RESERVATION_RESTORE,
                order_id=order.id,
            )

        self._order_repo.delete(order_id)
        return summary
