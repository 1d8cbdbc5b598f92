"""Application service: Create Order use case.

Creates an order (or malinha) and, when its status holds stock, reserves
every selected garment through the batch service. The order is only
persisted once the reservation went through, and a failed save gives the
reservation back.
"""

from __future__ import annotations

from studio30.application.dto import LineItemSpec, OrderDTO
from studio30.application.show_order import order_to_dto
from studio30.domain.exceptions import DomainException, ValidationError
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.order import Order, OrderStatus
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.model.value_objects import Money, Quantity
from studio30.domain.repository.order_repository import OrderRepository
from studio30.domain.service.stock_batch_service import StockBatchService
from studio30.domain.service.stock_ledger import StockAdjustment


def build_line_items(specs: list[LineItemSpec]) -> list[LineItem]:
    return [
        LineItem(
            product_id=spec.product_id,
            quantity=Quantity(spec.quantity),
            selected_color=spec.color,
            selected_size=spec.size,
            unit_price=Money.of(spec.price),
        )
        for spec in specs
    ]


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().lower())
    except ValueError as exc:
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}'. Expected one of: {valid}") from exc


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_service: StockBatchService,
    ) -> None:
        self._order_repo = order_repo
        self._batch_service = batch_service

    def handle(
        self,
        customer_name: str,
        item_specs: list[LineItemSpec],
        status: str = OrderStatus.PENDING.value,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Build line items and let the Order aggregate validate them.
        2. Reserve stock if the initial status holds it (fails the whole
           creation, without leaving stock reserved, if any item is short).
        3. Persist and return a DTO. If persisting fails, the stock taken in
           step 2 is given back before the error propagates.
        """
        order = Order.create(
            customer_name=customer_name,
            items=build_line_items(item_specs),
            status=parse_status(status),
        )
        order.id = self._order_repo.next_id()

        applied: list[StockAdjustment] = []
        if order.holds_stock:
            applied = self._batch_service.reserve_items(
                order.items,
                movement_type=MovementType.RESERVATION_OUT,
                order_id=order.id,
            )

        try:
            self._order_repo.save(order)
        except DomainException:
            if applied:
                self._batch_service.restore_adjustments(applied, order_id=order.id)
            raise
        return order_to_dto(order)
