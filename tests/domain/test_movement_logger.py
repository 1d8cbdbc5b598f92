"""Unit tests for the best-effort movement logger."""

import logging

from studio30.domain.model.stock_movement import MovementType
from studio30.domain.model.value_objects import StockDirection
from studio30.domain.service.movement_logger import MovementLogger
from tests.fakes import FailingStockMovementRepository, FakeStockMovementRepository


class TestMovementLogger:

    def test_record_appends_movement(self):
        repo = FakeStockMovementRepository()

        movement = MovementLogger(repo).record(
            3, 2, MovementType.SALE, notes="Venda #1", order_id=1
        )

        assert movement.id == 1
        assert repo.list_for_product(3) == [movement]
        assert movement.movement_type.value == "venda"

    def test_failure_is_logged_and_swallowed(self, caplog):
        with caplog.at_level(logging.ERROR):
            movement = MovementLogger(FailingStockMovementRepository()).record(
                3, 2, MovementType.ENTRY
            )

        assert movement is None
        assert "Failed to record entrada movement of 2 for product 3" in caplog.text

    def test_newest_first(self):
        repo = FakeStockMovementRepository()
        log = MovementLogger(repo)
        first = log.record(3, 1, MovementType.ENTRY)
        second = log.record(3, 1, MovementType.MANUAL)
        log.record(4, 1, MovementType.ENTRY)

        assert repo.list_for_product(3) == [second, first]


class TestMovementType:

    def test_default_for_direction(self):
        assert MovementType.default_for(StockDirection.RESERVE) is MovementType.RESERVATION_OUT
        assert MovementType.default_for(StockDirection.RESTORE) is MovementType.ENTRY
