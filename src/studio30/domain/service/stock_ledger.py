"""Domain service: Stock Ledger.

Applies one signed quantity change to exactly one (colour, size) cell of
one product and keeps the product's ``stock`` total consistent.

Every adjustment is a read-modify-write of the whole ``variants`` tree:

1. load a fresh copy of the product;
2. resolve the colour and size to a cell (see ``variant_resolver``);
3. validate the change (reserve never drives a cell below zero);
4. mutate the copy and recompute ``stock``;
5. persist it with a single write guarded by the product version;
6. record a stock movement, best effort.

Nothing is written unless steps 1 to 4 succeed, and a concurrent writer
that got in between 1 and 5 makes the write fail with
ConcurrentUpdateError instead of silently overwriting its update. The
ledger never retries; callers decide.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from studio30.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from studio30.domain.model.product import Product
from studio30.domain.model.stock_movement import MovementType, StockMovement
from studio30.domain.model.value_objects import Quantity, StockDirection
from studio30.domain.repository.product_repository import ProductRepository
from studio30.domain.service.movement_logger import MovementLogger
from studio30.domain.service.variant_resolver import (
    MatchKind,
    resolve_size,
    resolve_variant,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockAdjustment:
    """Result of a successful ``adjust_stock`` call."""

    product: Product
    direction: StockDirection
    quantity: int
    color_name: str
    size: str
    variant_match: MatchKind
    size_match: MatchKind
    previous_quantity: int
    new_quantity: int
    movement: StockMovement | None


@dataclass(frozen=True)
class AdjustmentOutcome:
    """Non-raising form of an adjustment: ``{success, updated_stock, error}``."""

    success: bool
    updated_stock: Product | None = None
    error: str | None = None


class StockLedger:

    def __init__(
        self,
        product_repo: ProductRepository,
        movement_logger: MovementLogger,
    ) -> None:
        self._product_repo = product_repo
        self._movement_logger = movement_logger

    def adjust_stock(
        self,
        product_id: int,
        quantity: int,
        color: str,
        size: str,
        direction: StockDirection | str,
        movement_type: MovementType | None = None,
        order_id: int | None = None,
    ) -> StockAdjustment:
        """Reserve or restore ``quantity`` units of one cell.

        Raises:
            ValidationError: ``quantity`` is not a positive integer.
            ProductNotFoundError: no product with ``product_id``.
            VariantNotFoundError / SizeNotFoundError: reserve only.
            InsufficientStockError: reserve only, nothing is written.
            PersistenceError: the store failed or the product changed
                concurrently (ConcurrentUpdateError).
        """
        qty = Quantity(quantity).value
        try:
            direction = StockDirection(direction)
        except ValueError as exc:
            raise ValidationError(
                f"Invalid direction {direction!r}, expected 'reserve' or 'restore'"
            ) from exc
        movement_type = movement_type or MovementType.default_for(direction)

        loaded = self._product_repo.get_by_id(product_id)
        if loaded is None:
            raise ProductNotFoundError(product_id)
        product = loaded.clone()

        variant_match = resolve_variant(product, color, direction)
        variant = variant_match.variant
        size_match = resolve_size(product, variant, size, direction)
        cell = size_match.cell

        previous = cell.quantity
        if direction is StockDirection.RESERVE and previous < qty:
            raise InsufficientStockError(
                product.name, variant.color_name, cell.size,
                requested=qty, available=previous,
            )

        if variant_match.kind is MatchKind.CREATED:
            product.variants.append(variant)
        if size_match.kind is MatchKind.CREATED:
            variant.size_stock.append(cell)
        cell.quantity = previous + direction.sign * qty

        product.recompute_stock()
        product.updated_at = datetime.now(timezone.utc)
        self._product_repo.save(product)

        logger.info(
            "Stock %s: product %s %s/%s %d -> %d (total %d)",
            direction.value, product.id, variant.color_name, cell.size,
            previous, cell.quantity, product.stock,
        )

        movement = self._movement_logger.record(
            product_id=product.id,
            quantity=qty,
            movement_type=movement_type,
            notes=f"Stock update ({direction.value}): {variant.color_name}/{cell.size}",
            order_id=order_id,
        )

        return StockAdjustment(
            product=product,
            direction=direction,
            quantity=qty,
            color_name=variant.color_name,
            size=cell.size,
            variant_match=variant_match.kind,
            size_match=size_match.kind,
            previous_quantity=previous,
            new_quantity=cell.quantity,
            movement=movement,
        )

    def try_adjust_stock(
        self,
        product_id: int,
        quantity: int,
        color: str,
        size: str,
        direction: StockDirection | str,
        movement_type: MovementType | None = None,
        order_id: int | None = None,
    ) -> AdjustmentOutcome:
        """Like ``adjust_stock`` but reports domain errors instead of raising."""
        try:
            result = self.adjust_stock(
                product_id, quantity, color, size, direction,
                movement_type=movement_type, order_id=order_id,
            )
        except DomainException as exc:
            return AdjustmentOutcome(success=False, error=str(exc))
        return AdjustmentOutcome(success=True, updated_stock=result.product)
