"""Application service: Show Order use case (query)."""

from __future__ import annotations

from datetime import datetime, timezone

from studio30.application.dto import LineItemDTO, OrderDTO
from studio30.domain.exceptions import EntityNotFoundError
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.order import Order
from studio30.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order_to_dto(order)


def format_utc(moment: datetime) -> str:
    """Render a timestamp in UTC. Naive values are taken to be UTC already."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def item_to_dto(item: LineItem) -> LineItemDTO:
    return LineItemDTO(
        product_id=item.product_id,
        quantity=item.quantity.value,
        color=item.selected_color or "-",
        size=item.selected_size or "-",
        unit_price=str(item.unit_price),
        line_total=str(item.line_total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        status=order.status.value,
        holds_stock=order.holds_stock,
        items=[item_to_dto(item) for item in order.items],
        total=str(order.total),
        created_at=format_utc(order.created_at),
    )
