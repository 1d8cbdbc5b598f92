"""JSON-file-backed implementation of StockMovementRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from studio30.domain.model.stock_movement import MovementType, StockMovement
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from studio30.infrastructure.persistence.json_file import JsonFile


class JsonStockMovementRepository(StockMovementRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    def add(self, movement: StockMovement) -> None:
        records = self._file.load()
        movement.id = max((r["id"] for r in records), default=0) + 1
        records.append(
            {
                "id": movement.id,
                "product_id": movement.product_id,
                "quantity": movement.quantity,
                "movement_type": movement.movement_type.value,
                "notes": movement.notes,
                "order_id": movement.order_id,
                "created_at": movement.created_at.isoformat(),
            }
        )
        self._file.persist(records)

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        movements = [
            StockMovement(
                id=raw["id"],
                product_id=raw["product_id"],
                quantity=raw["quantity"],
                movement_type=MovementType(raw["movement_type"]),
                notes=raw.get("notes") or "",
                order_id=raw.get("order_id"),
                created_at=datetime.fromisoformat(raw["created_at"]),
            )
            for raw in self._file.load()
            if raw["product_id"] == product_id
        ]
        movements.sort(key=lambda m: (m.created_at, m.id or 0), reverse=True)
        return movements
