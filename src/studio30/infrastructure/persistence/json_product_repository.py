"""JSON-file-backed implementation of ProductRepository.

Writes are compare-and-swap on ``version``: the check and the write
happen under one lock, so within a process two writers that read the same
version can never both succeed.

The lock is process-wide, not a file lock: two separate processes writing
the same file can still race. Run a single writer per data directory, or
set STUDIO30_DATABASE_URL, where the conditional UPDATE holds across
processes.
"""

from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path

from studio30.domain.exceptions import (
    ConcurrentUpdateError,
    PersistenceError,
    ProductNotFoundError,
)
from studio30.domain.model.product import Product
from studio30.domain.repository.product_repository import ProductRepository
from studio30.infrastructure.persistence.json_file import JsonFile
from studio30.infrastructure.persistence.serialization import (
    product_from_raw,
    variants_to_raw,
)

_write_lock = threading.Lock()


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def add(self, product: Product) -> None:
        with _write_lock:
            records = self._file.load()
            if any(raw["id"] == product.id for raw in records):
                raise PersistenceError(f"Product {product.id} already exists")
            records.append(self._to_raw(product))
            self._file.persist(records)

    def save(self, product: Product) -> None:
        with _write_lock:
            records = self._file.load()
            for i, raw in enumerate(records):
                if raw["id"] != product.id:
                    continue
                if raw.get("version", 0) != product.version:
                    raise ConcurrentUpdateError(product.id, product.version)
                records[i] = self._to_raw(product, version=product.version + 1)
                self._file.persist(records)
                product.version += 1
                return
        raise ProductNotFoundError(product.id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product, version: int | None = None) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "color": product.color,
            "stock": product.stock,
            "variants": variants_to_raw(product.variants),
            "version": product.version if version is None else version,
            "updated_at": product.updated_at.isoformat() if product.updated_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        product = product_from_raw(raw)
        product.version = raw.get("version", 0)
        updated_at = raw.get("updated_at")
        product.updated_at = datetime.fromisoformat(updated_at) if updated_at else None
        return product
