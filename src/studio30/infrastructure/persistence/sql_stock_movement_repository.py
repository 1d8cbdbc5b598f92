"""SQLAlchemy-backed implementation of StockMovementRepository."""

from __future__ import annotations

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from studio30.domain.exceptions import PersistenceError
from studio30.domain.model.stock_movement import MovementType, StockMovement
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from studio30.infrastructure.persistence.sql_schema import stock_movements


class SqlStockMovementRepository(StockMovementRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add(self, movement: StockMovement) -> None:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    insert(stock_movements).values(
                        product_id=movement.product_id,
                        quantity=movement.quantity,
                        movement_type=movement.movement_type.value,
                        notes=movement.notes,
                        order_id=movement.order_id,
                        created_at=movement.created_at,
                    )
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot record stock movement: {exc}") from exc
        movement.id = result.inserted_primary_key[0]

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        query = (
            select(stock_movements)
            .where(stock_movements.c.product_id == product_id)
            .order_by(stock_movements.c.created_at.desc(), stock_movements.c.id.desc())
        )
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot list movements of product {product_id}: {exc}") from exc
        return [
            StockMovement(
                id=row["id"],
                product_id=row["product_id"],
                quantity=row["quantity"],
                movement_type=MovementType(row["movement_type"]),
                notes=row["notes"] or "",
                order_id=row["order_id"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
