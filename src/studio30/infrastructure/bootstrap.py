"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine

from studio30.domain.exceptions import PersistenceError
from studio30.domain.repository.product_repository import ProductRepository
from studio30.domain.repository.stock_movement_repository import (
    StockMovementRepository,
)
from studio30.domain.service.movement_logger import MovementLogger
from studio30.domain.service.stock_batch_service import StockBatchService
from studio30.domain.service.stock_ledger import StockLedger
from studio30.infrastructure.config import Settings, get_settings
from studio30.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from studio30.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from studio30.infrastructure.persistence.json_sale_repository import (
    JsonSaleRepository,
)
from studio30.infrastructure.persistence.json_stock_movement_repository import (
    JsonStockMovementRepository,
)
from studio30.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from studio30.infrastructure.persistence.sql_schema import create_schema, make_engine
from studio30.infrastructure.persistence.sql_stock_movement_repository import (
    SqlStockMovementRepository,
)


def settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=None)
def _engine(url: str) -> Engine:
    return make_engine(url)


def product_repository() -> ProductRepository:
    cfg = settings()
    if cfg.database_url:
        return SqlProductRepository(_engine(cfg.database_url))
    return JsonProductRepository(cfg.data_dir / "products.json")


def movement_repository() -> StockMovementRepository:
    cfg = settings()
    if cfg.database_url:
        return SqlStockMovementRepository(_engine(cfg.database_url))
    return JsonStockMovementRepository(cfg.data_dir / "stock_movements.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def sale_repository() -> JsonSaleRepository:
    return JsonSaleRepository(settings().data_dir / "sales.json")


def stock_ledger() -> StockLedger:
    return StockLedger(product_repository(), MovementLogger(movement_repository()))


def batch_service() -> StockBatchService:
    return StockBatchService(stock_ledger(), product_repository())


def init_database() -> str:
    """Create the relational tables; returns the URL it connected to."""
    cfg = settings()
    if not cfg.database_url:
        raise PersistenceError("STUDIO30_DATABASE_URL is not set")
    engine = _engine(cfg.database_url)
    create_schema(engine)
    return engine.url.render_as_string(hide_password=True)
