"""Tests for manual adjustments and the stock query handlers."""

from datetime import datetime, timedelta, timezone

import pytest

from studio30.application.adjust_stock import AdjustStockHandler
from studio30.application.show_movements import ShowMovementsHandler
from studio30.application.show_stock import LowStockHandler, ShowStockHandler
from studio30.domain.exceptions import InsufficientStockError, ProductNotFoundError
from studio30.domain.model.stock_movement import MovementType, StockMovement
from tests.fakes import (
    FakeProductRepository,
    FakeStockMovementRepository,
    make_ledger,
    make_product,
)


def _products():
    return FakeProductRepository([
        make_product(1, {"Preto": {"P": 1, "M": 0}}, color="Preto", name="Vestido"),
        make_product(2, {"Azul": {"U": 8}}, name="Bolsa"),
        make_product(3, {"Rosa": {"G": 2}}, name="Saia"),
        make_product(4, {}, name="Lenço"),
    ])


class TestAdjustStock:

    def test_manual_restore_creates_cell(self):
        repo = _products()
        movements = FakeStockMovementRepository()

        dto = AdjustStockHandler(make_ledger(repo, movements)).handle(3, 4, "Rosa", "M", "restore")

        assert dto.previous_quantity == 0
        assert dto.new_quantity == 4
        assert dto.total_stock == 6
        assert movements.movements[0].movement_type.value == "ajuste"

    def test_manual_reserve_is_bounded(self):
        with pytest.raises(InsufficientStockError):
            AdjustStockHandler(make_ledger(_products())).handle(1, 2, "Preto", "P", "reserve")


class TestShowStock:

    def test_breakdown_lists_every_cell(self):
        dto = ShowStockHandler(_products()).handle(1)

        assert dto.total == 1
        assert dto.default_color == "Preto"
        assert [(c.color, c.size, c.quantity) for c in dto.cells] == [
            ("Preto", "P", 1),
            ("Preto", "M", 0),
        ]

    def test_missing_product(self):
        with pytest.raises(ProductNotFoundError):
            ShowStockHandler(_products()).handle(99)


class TestLowStock:

    def test_lists_products_at_or_below_threshold_lowest_first(self):
        low = LowStockHandler(_products()).handle()
        assert [p.product_id for p in low] == [4, 1, 3]

    def test_custom_threshold_and_limit(self):
        low = LowStockHandler(_products(), threshold=10).handle(limit=2)
        assert [p.product_id for p in low] == [4, 1]


class TestShowMovements:

    def test_history_is_newest_first(self):
        repo = _products()
        movements = FakeStockMovementRepository()
        ledger = make_ledger(repo, movements)
        ledger.adjust_stock(2, 3, "Azul", "U", "reserve", order_id=5)
        ledger.adjust_stock(2, 1, "Azul", "U", "restore")

        history = ShowMovementsHandler(movements).handle(2)

        assert [m.movement_type for m in history] == ["entrada", "saida_malinha"]
        assert history[1].order_id == 5
        assert history[1].quantity == 3

    def test_empty_history(self):
        assert ShowMovementsHandler(FakeStockMovementRepository()).handle(1) == []

    def test_times_are_shown_in_utc(self):
        movements = FakeStockMovementRepository()
        sao_paulo = timezone(timedelta(hours=-3))
        movements.add(StockMovement(
            1, 1, MovementType.SALE,
            created_at=datetime(2024, 3, 9, 21, 30, tzinfo=sao_paulo),
        ))
        movements.add(StockMovement(1, 1, MovementType.ENTRY, created_at=datetime(2024, 3, 9, 8, 5)))

        history = ShowMovementsHandler(movements).handle(1)

        assert [m.created_at for m in history] == ["2024-03-09 08:05 UTC", "2024-03-10 00:30 UTC"]
