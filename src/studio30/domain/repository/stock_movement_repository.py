"""Abstract repository for the append-only stock movement log."""

from __future__ import annotations

from abc import ABC, abstractmethod

from studio30.domain.model.stock_movement import StockMovement


class StockMovementRepository(ABC):

    @abstractmethod
    def add(self, movement: StockMovement) -> None:
        """Append a movement, assigning its ID."""

    @abstractmethod
    def list_for_product(self, product_id: int) -> list[StockMovement]:
        """Return the movements of one product, newest first."""
