"""Application service: Update Order use case.

Editing an order is modelled as "give everything back, then take the new
selection": if the order held stock, its current items are restored; if
the order still holds stock after the edit, the new items are reserved.

When the new reservation fails, whatever was actually given back is
reserved again, cell by cell, so the shop ends up where it started, and
the order is left unchanged.
"""

from __future__ import annotations

import logging

from studio30.application.create_order import build_line_items, parse_status
from studio30.application.dto import LineItemSpec, OrderDTO
from studio30.application.show_order import order_to_dto
from studio30.domain.exceptions import DomainException, EntityNotFoundError
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.order import Order
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.repository.order_repository import OrderRepository
from studio30.domain.service.stock_batch_service import (
    StockBatchService,
    adjustments_to_items,
)
from studio30.domain.service.stock_ledger import StockAdjustment

logger = logging.getLogger(__name__)


def reconcile_order_stock(
    batch_service: StockBatchService,
    order: Order,
    previous_items: list[LineItem],
    previously_holding: bool,
) -> None:
    """Move stock so it matches the order's current items and status."""
    if previously_holding == order.holds_stock and previous_items == order.items:
        return

    released: list[StockAdjustment] = []
    if previously_holding:
        summary = batch_service.release_items(
            previous_items,
            movement_type=MovementType.RESERVATION_RESTORE,
            order_id=order.id,
        )
        if not summary.success:
            logger.warning("Order #%s: partial stock release: %s", order.id, summary.error)
        released = summary.released

    if not order.holds_stock:
        return

    try:
        batch_service.reserve_items(
            order.items,
            movement_type=MovementType.RESERVATION_OUT,
            order_id=order.id,
        )
    except DomainException:
        if released:
            try:
                batch_service.reserve_items(
                    adjustments_to_items(released),
                    movement_type=MovementType.RESERVATION_OUT,
                    order_id=order.id,
                )
            except DomainException:
                logger.exception(
                    "Order #%s: could not re-reserve its previous items", order.id
                )
        raise


class UpdateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_service: StockBatchService,
    ) -> None:
        self._order_repo = order_repo
        self._batch_service = batch_service

    def handle(
        self,
        order_id: int,
        item_specs: list[LineItemSpec] | None = None,
        status: str | None = None,
    ) -> OrderDTO:
        """Replace the items and/or the status of an order.

        Args:
            order_id: The order to update.
            item_specs: The new full list of items, or None to keep them.
            status: The new status value, or None to keep it.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous_items = list(order.items)
        previously_holding = order.holds_stock

        if item_specs is not None:
            order.replace_items(build_line_items(item_specs))
        if status is not None:
            order.change_status(parse_status(status))

        reconcile_order_stock(self._batch_service, order, previous_items, previously_holding)

        self._order_repo.save(order)
        return order_to_dto(order)
