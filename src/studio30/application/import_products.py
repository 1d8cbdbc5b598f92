"""Application service: seed the catalog with products.

Used to load the storefront's product list into an empty store, or to
add new products later. Products already in the store are left alone:
their stock belongs to the ledger from the first import on.
"""

from __future__ import annotations

import logging

from studio30.application.dto import ImportResultDTO
from studio30.domain.model.product import Product
from studio30.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ImportProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, products: list[Product]) -> ImportResultDTO:
        """Add every product whose id is not stored yet.

        The stock total is recomputed from the variants and checked
        before anything is written, so one bad row imports nothing.
        """
        for product in products:
            product.recompute_stock()
            product.check_invariants()
            product.version = 0
            product.updated_at = None

        added: list[int] = []
        skipped: list[int] = []
        for product in products:
            if self._product_repo.get_by_id(product.id) is not None:
                logger.info("Product %s already stored, skipping", product.id)
                skipped.append(product.id)
                continue
            self._product_repo.add(product)
            added.append(product.id)

        logger.info("Imported %d product(s), skipped %d", len(added), len(skipped))
        return ImportResultDTO(added=added, skipped=skipped)
