"""Integration tests for the UpdateOrder and DeleteOrder use cases."""

import pytest

from studio30.application.create_order import CreateOrderHandler
from studio30.application.delete_order import DeleteOrderHandler
from studio30.application.dto import LineItemSpec
from studio30.application.update_order import UpdateOrderHandler
from studio30.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from studio30.domain.model.stock_movement import MovementType
from tests.fakes import (
    FakeOrderRepository,
    FakeProductRepository,
    FakeStockMovementRepository,
    cell_quantity,
    make_batch_service,
    make_product,
)


def _setup():
    product_repo = FakeProductRepository([
        make_product(1, {"Preto": {"P": 2, "M": 3}}, color="Preto"),
        make_product(2, {"Azul": {"U": 1}}),
    ])
    movements = FakeStockMovementRepository()
    order_repo = FakeOrderRepository()
    batch = make_batch_service(product_repo, movements)
    create = CreateOrderHandler(order_repo, batch)
    update = UpdateOrderHandler(order_repo, batch)
    delete = DeleteOrderHandler(order_repo, batch)
    return create, update, delete, order_repo, product_repo, movements


class TestUpdateOrder:

    def test_replacing_items_moves_stock(self):
        create, update, _, _, product_repo, _ = _setup()
        order = create.handle("Ana", [LineItemSpec(1, 2, "Preto", "M")])

        dto = update.handle(order.id, item_specs=[LineItemSpec(1, 1, "Preto", "P")])

        product = product_repo.get_by_id(1)
        assert cell_quantity(product, "Preto", "M") == 3
        assert cell_quantity(product, "Preto", "P") == 1
        assert dto.items[0].size == "P"

    def test_status_change_that_stops_holding_releases_stock(self):
        create, update, _, order_repo, product_repo, movements = _setup()
        order = create.handle("Ana", [LineItemSpec(2, 1, "Azul", "U")])

        dto = update.handle(order.id, status="cancelled")

        assert dto.status == "cancelled"
        assert product_repo.get_by_id(2).stock == 1
        assert movements.movements[-1].movement_type is MovementType.RESERVATION_RESTORE

    def test_status_change_that_starts_holding_reserves_stock(self):
        create, update, _, _, product_repo, _ = _setup()
        order = create.handle("Ana", [LineItemSpec(2, 1, "Azul", "U")], status="returned")
        assert product_repo.get_by_id(2).stock == 1

        update.handle(order.id, status="shipped")

        assert product_repo.get_by_id(2).stock == 0

    def test_status_change_within_holding_statuses_leaves_stock_alone(self):
        create, update, _, _, product_repo, movements = _setup()
        order = create.handle("Ana", [LineItemSpec(1, 1, "Preto", "M")])
        writes = product_repo.writes

        update.handle(order.id, status="shipped")

        assert product_repo.writes == writes
        assert len(movements.movements) == 1

    def test_failed_reservation_restores_previous_reservation(self):
        create, update, _, order_repo, product_repo, _ = _setup()
        order = create.handle("Ana", [LineItemSpec(1, 2, "Preto", "M")])

        with pytest.raises(InsufficientStockError):
            update.handle(order.id, item_specs=[LineItemSpec(1, 4, "Preto", "M")])

        assert cell_quantity(product_repo.get_by_id(1), "Preto", "M") == 1
        assert order_repo.get_by_id(order.id).items[0].quantity.value == 2

    def test_failed_reservation_re_reserves_only_what_was_released(self):
        create, update, _, order_repo, product_repo, _ = _setup()
        order = create.handle("Ana", [
            LineItemSpec(1, 1, "Preto", "M"),
            LineItemSpec(2, 1, "Azul", "U"),
        ])
        del product_repo._store[2]

        with pytest.raises(InsufficientStockError):
            update.handle(order.id, item_specs=[LineItemSpec(1, 10, "Preto", "M")])

        product = product_repo.get_by_id(1)
        assert cell_quantity(product, "Preto", "M") == 2
        assert product.stock == 4
        assert len(order_repo.get_by_id(order.id).items) == 2

    def test_closed_order_cannot_be_edited(self):
        create, update, _, _, _, _ = _setup()
        order = create.handle("Ana", [LineItemSpec(1, 1, "Preto", "M")], status="completed")

        with pytest.raises(ValidationError, match="can no longer change"):
            update.handle(order.id, item_specs=[LineItemSpec(1, 2, "Preto", "M")])

    def test_missing_order(self):
        _, update, _, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Order #42 not found"):
            update.handle(42, status="active")


class TestDeleteOrder:

    def test_delete_releases_stock_and_removes_order(self):
        create, _, delete, order_repo, product_repo, _ = _setup()
        order = create.handle("Ana", [
            LineItemSpec(1, 2, "Preto", "M"),
            LineItemSpec(2, 1, "Azul", "U"),
        ])

        summary = delete.handle(order.id)

        assert summary.success
        assert len(summary.released) == 2
        assert order_repo.get_by_id(order.id) is None
        assert product_repo.get_by_id(1).stock == 5
        assert product_repo.get_by_id(2).stock == 1

    def test_delete_of_order_not_holding_stock_touches_nothing(self):
        create, _, delete, order_repo, product_repo, _ = _setup()
        order = create.handle("Ana", [LineItemSpec(1, 1, "Preto", "M")], status="returned")

        summary = delete.handle(order.id)

        assert summary.released == []
        assert product_repo.writes == 0
        assert order_repo.get_by_id(order.id) is None

    def test_delete_survives_vanished_product(self):
        create, _, delete, order_repo, product_repo, _ = _setup()
        order = create.handle("Ana", [
            LineItemSpec(1, 1, "Preto", "M"),
            LineItemSpec(2, 1, "Azul", "U"),
        ])
        product_repo._store.pop(1)

        summary = delete.handle(order.id)

        assert not summary.success
        assert "Product 1 not found" in summary.error
        assert product_repo.get_by_id(2).stock == 1
        assert order_repo.get_by_id(order.id) is None

    def test_missing_order(self):
        _, _, delete, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            delete.handle(7)
