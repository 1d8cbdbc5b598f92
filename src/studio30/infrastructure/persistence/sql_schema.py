"""SQLAlchemy table definitions and engine factory for the relational store.

The ``products`` table mirrors the shop's PostgreSQL/Supabase table, plus a
``version`` column used as the compare-and-swap token on stock writes.
Existing databases need it added once:

    ALTER TABLE products ADD COLUMN version integer NOT NULL DEFAULT 0;
"""

from __future__ import annotations

import logging
import re

from sqlalchemy import (
    JSON,
    BigInteger,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Table,
    Text,
    create_engine,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from studio30.domain.exceptions import PersistenceError

logger = logging.getLogger(__name__)

# BIGINT ids in PostgreSQL; SQLite only autoincrements INTEGER primary keys.
_Id = BigInteger().with_variant(Integer(), "sqlite")

metadata = MetaData()

products = Table(
    "products",
    metadata,
    Column("id", _Id, primary_key=True),
    Column("name", Text, nullable=False),
    Column("color", Text),
    Column("stock", Integer),
    Column("variants", JSON().with_variant(JSONB(), "postgresql"), nullable=False),
    Column("version", Integer, nullable=False, server_default="0"),
    Column("updated_at", DateTime(timezone=True), server_default=func.now()),
)

stock_movements = Table(
    "stock_movements",
    metadata,
    Column("id", _Id, primary_key=True, autoincrement=True),
    Column("product_id", _Id, ForeignKey("products.id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("movement_type", Text, nullable=False),
    Column("notes", Text),
    Column("order_id", _Id),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
)


def normalize_database_url(url: str) -> str:
    """Point plain ``postgres://`` URLs at the psycopg 3 driver."""
    url = url.strip().strip("'\"")
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+psycopg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return re.sub(r"^postgres(?:ql)?\+asyncpg://", "postgresql+psycopg://", url)


def make_engine(url: str) -> Engine:
    engine = create_engine(normalize_database_url(url), pool_pre_ping=True)
    logger.debug("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def create_schema(engine: Engine) -> None:
    """Create missing tables (``studio30 db init`` and tests)."""
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Cannot create schema: {exc}") from exc
    logger.info("Schema ready: %s", ", ".join(sorted(metadata.tables)))
