"""Application services: stock queries (per-product breakdown, low stock)."""

from __future__ import annotations

from studio30.application.dto import ProductStockDTO, SizeStockDTO
from studio30.domain.exceptions import ProductNotFoundError
from studio30.domain.model.product import Product
from studio30.domain.repository.product_repository import ProductRepository

DEFAULT_LOW_STOCK_THRESHOLD = 2


def _to_dto(product: Product) -> ProductStockDTO:
    return ProductStockDTO(
        product_id=product.id,
        name=product.name,
        default_color=product.color,
        total=product.stock,
        cells=[
            SizeStockDTO(color=variant.color_name, size=cell.size, quantity=cell.quantity)
            for variant in product.variants
            for cell in variant.size_stock
        ],
    )


class ShowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int) -> ProductStockDTO:
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return _to_dto(product)


class LowStockHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._product_repo = product_repo
        self._threshold = threshold

    def handle(self, limit: int = 10) -> list[ProductStockDTO]:
        """Products with ``stock <= threshold``, lowest first."""
        low = [p for p in self._product_repo.list_all() if p.stock <= self._threshold]
        low.sort(key=lambda p: (p.stock, p.id))
        return [_to_dto(p) for p in low[:limit]]
