"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from studio30.domain.model.line_item import LineItem
from studio30.domain.model.order import Order, OrderStatus
from studio30.domain.model.value_objects import Money, Quantity
from studio30.domain.repository.order_repository import OrderRepository
from studio30.infrastructure.persistence.json_file import JsonFile


def item_to_raw(item: LineItem) -> dict:
    return {
        "productId": item.product_id,
        "quantity": item.quantity.value,
        "selectedColor": item.selected_color,
        "selectedSize": item.selected_size,
        "price": str(item.unit_price.amount),
        "currency": item.unit_price.currency,
    }


def item_from_raw(raw: dict) -> LineItem:
    return LineItem(
        product_id=raw["productId"],
        quantity=Quantity(raw["quantity"]),
        selected_color=raw.get("selectedColor"),
        selected_size=raw.get("selectedSize"),
        unit_price=Money(Decimal(raw.get("price") or "0"), raw.get("currency", "BRL")),
    )


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._file.load()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._file.load():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def save(self, order: Order) -> None:
        orders = self._file.load()

        if order.id is None:
            order.id = self.next_id()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._file.persist(orders)

    def delete(self, order_id: int) -> None:
        orders = [raw for raw in self._file.load() if raw["id"] != order_id]
        self._file.persist(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_name": order.customer_name,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "items": [item_to_raw(item) for item in order.items],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        return Order(
            id=raw["id"],
            customer_name=raw["customer_name"],
            items=[item_from_raw(i) for i in raw["items"]],
            status=OrderStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
