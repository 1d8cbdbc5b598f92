"""SQLAlchemy-backed implementation of ProductRepository.

``save`` is a single conditional UPDATE:

    UPDATE products
       SET variants = :variants, stock = :stock, updated_at = :now,
           version = version + 1
     WHERE id = :id AND version = :expected

The database applies it atomically, so when two writers read the same
version only the first UPDATE matches a row; the second affects none and
is reported as ConcurrentUpdateError.
"""

from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from studio30.domain.exceptions import (
    ConcurrentUpdateError,
    PersistenceError,
    ProductNotFoundError,
)
from studio30.domain.model.product import Product
from studio30.domain.repository.product_repository import ProductRepository
from studio30.infrastructure.persistence.serialization import (
    variants_from_raw,
    variants_to_raw,
)
from studio30.infrastructure.persistence.sql_schema import products


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_by_id(self, product_id: int) -> Product | None:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(products).where(products.c.id == product_id)
                ).mappings().first()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot load product {product_id}: {exc}") from exc
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(products).order_by(products.c.id)).mappings().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot list products: {exc}") from exc
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(products).values(
                        id=product.id,
                        name=product.name,
                        color=product.color,
                        stock=product.stock,
                        variants=variants_to_raw(product.variants),
                        version=product.version,
                    )
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot insert product {product.id}: {exc}") from exc

    def save(self, product: Product) -> None:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(products)
                    .where(products.c.id == product.id)
                    .where(products.c.version == product.version)
                    .values(
                        variants=variants_to_raw(product.variants),
                        stock=product.stock,
                        updated_at=product.updated_at,
                        version=products.c.version + 1,
                    )
                )
                matched = result.rowcount
                exists = True
                if matched == 0:
                    exists = conn.execute(
                        select(products.c.id).where(products.c.id == product.id)
                    ).first() is not None
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Cannot update product {product.id}: {exc}") from exc

        if matched == 0:
            if not exists:
                raise ProductNotFoundError(product.id)
            raise ConcurrentUpdateError(product.id, product.version)
        product.version += 1

    @staticmethod
    def _to_domain(row: RowMapping) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            color=row["color"] or "",
            variants=variants_from_raw(row["variants"]),
            stock=row["stock"] or 0,
            version=row["version"],
            updated_at=row["updated_at"],
        )
