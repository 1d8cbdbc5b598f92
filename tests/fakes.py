"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON and SQL
repositories but keep everything in a dict. No file I/O, no side effects.
Stored objects are copied on the way in and out, like a real store.
"""

from __future__ import annotations

import copy
from typing import Callable

from studio30.domain.exceptions import (
    ConcurrentUpdateError,
    PersistenceError,
    ProductNotFoundError,
)
from studio30.domain.model.order import Order
from studio30.domain.model.product import Product, SizeStock, Variant
from studio30.domain.model.sale import Sale
from studio30.domain.model.stock_movement import StockMovement
from studio30.domain.repository.order_repository import OrderRepository
from studio30.domain.repository.product_repository import ProductRepository
from studio30.domain.repository.sale_repository import SaleRepository
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from studio30.domain.service.movement_logger import MovementLogger
from studio30.domain.service.stock_batch_service import StockBatchService
from studio30.domain.service.stock_ledger import StockLedger


def make_product(
    product_id: int,
    variants: dict[str, dict[str, int]],
    color: str = "",
    name: str | None = None,
) -> Product:
    """Build a product from {color: {size: qty}} with a consistent total."""
    product = Product(
        id=product_id,
        name=name or f"Product {product_id}",
        color=color,
        variants=[
            Variant(
                color_name=color_name,
                size_stock=[SizeStock(size=s, quantity=q) for s, q in sizes.items()],
            )
            for color_name, sizes in variants.items()
        ],
    )
    product.recompute_stock()
    return product


def cell_quantity(product: Product, color: str, size: str) -> int:
    for variant in product.variants:
        if variant.color_name == color:
            for cell in variant.size_stock:
                if cell.size == size:
                    return cell.quantity
    raise AssertionError(f"No cell {color}/{size} in product {product.id}")


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self.writes = 0
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def get_by_id(self, product_id: int) -> Product | None:
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def add(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)

    def save(self, product: Product) -> None:
        stored = self._store.get(product.id)
        if stored is None:
            raise ProductNotFoundError(product.id)
        if stored.version != product.version:
            raise ConcurrentUpdateError(product.id, product.version)
        product.version += 1
        self._store[product.id] = copy.deepcopy(product)
        self.writes += 1


class RacingProductRepository(FakeProductRepository):
    """Runs ``competitor`` once, right after the next product read.

    Simulates a second request that reads and writes the same product
    between this request's read and its write.
    """

    def __init__(self, products: list[Product], competitor: Callable[[], object] | None = None) -> None:
        super().__init__(products)
        self.competitor = competitor

    def get_by_id(self, product_id: int) -> Product | None:
        product = super().get_by_id(product_id)
        competitor, self.competitor = self.competitor, None
        if competitor is not None:
            competitor()
        return product


class BrokenProductRepository(FakeProductRepository):
    """Reads work, every write fails like a lost database connection."""

    def save(self, product: Product) -> None:
        raise PersistenceError("connection reset by peer")


class FakeOrderRepository(OrderRepository):

    def __init__(self) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1

    def next_id(self) -> int:
        next_id = self._next_id
        self._next_id += 1
        return next_id

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def save(self, order: Order) -> None:
        if order.id is None:
            order.id = self.next_id()
        self._store[order.id] = copy.deepcopy(order)

    def delete(self, order_id: int) -> None:
        self._store.pop(order_id, None)


class BrokenOrderRepository(FakeOrderRepository):
    """Hands out ids but cannot store orders."""

    def save(self, order: Order) -> None:
        raise PersistenceError("disk full")

class FakeSaleRepository(SaleRepository):

    def __init__(self) -> None:
        self._store: dict[int, Sale] = {}

    def get_by_id(self, sale_id: int) -> Sale | None:
        return self._store.get(sale_id)

    def save(self, sale: Sale) -> None:
        if sale.id is None:
            sale.id = len(self._store) + 1
        self._store[sale.id] = sale


class BrokenSaleRepository(FakeSaleRepository):

    def save(self, sale: Sale) -> None:
        raise PersistenceError("disk full")

class FakeStockMovementRepository(StockMovementRepository):

    def __init__(self) -> None:
        self.movements: list[StockMovement] = []

    def add(self, movement: StockMovement) -> None:
        movement.id = len(self.movements) + 1
        self.movements.append(movement)

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        return [m for m in reversed(self.movements) if m.product_id == product_id]


class FailingStockMovementRepository(StockMovementRepository):

    def add(self, movement: StockMovement) -> None:
        raise PersistenceError("stock_movements table is missing")

    def list_for_product(self, product_id: int) -> list[StockMovement]:
        return []


def make_ledger(
    product_repo: ProductRepository,
    movement_repo: StockMovementRepository | None = None,
) -> StockLedger:
    return StockLedger(
        product_repo, MovementLogger(movement_repo or FakeStockMovementRepository())
    )


def make_batch_service(
    product_repo: ProductRepository,
    movement_repo: StockMovementRepository | None = None,
) -> StockBatchService:
    return StockBatchService(make_ledger(product_repo, movement_repo), product_repo)
