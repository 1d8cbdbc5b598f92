"""JSON-file-backed implementation of SaleRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from studio30.domain.model.sale import Sale
from studio30.domain.repository.sale_repository import SaleRepository
from studio30.infrastructure.persistence.json_file import JsonFile
from studio30.infrastructure.persistence.json_order_repository import (
    item_from_raw,
    item_to_raw,
)


class JsonSaleRepository(SaleRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def get_by_id(self, sale_id: int) -> Sale | None:
        for raw in self._file.load():
            if raw["id"] == sale_id:
                return Sale(
                    id=raw["id"],
                    customer_name=raw["customer_name"],
                    items=[item_from_raw(i) for i in raw["items"]],
                    payment_method=raw["payment_method"],
                    order_id=raw.get("order_id"),
                    created_at=datetime.fromisoformat(raw["created_at"]),
                )
        return None

    def save(self, sale: Sale) -> None:
        sales = self._file.load()
        if sale.id is None:
            sale.id = max((s["id"] for s in sales), default=0) + 1
        sales = [raw for raw in sales if raw["id"] != sale.id]
        sales.append(
            {
                "id": sale.id,
                "customer_name": sale.customer_name,
                "payment_method": sale.payment_method,
                "order_id": sale.order_id,
                "created_at": sale.created_at.isoformat(),
                "items": [item_to_raw(item) for item in sale.items],
            }
        )
        self._file.persist(sales)
