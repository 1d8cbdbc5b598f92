"""Domain service: apply the stock ledger to every line item of an order
or sale.

Items are always processed one at a time, in order, so two items of the
same order never interleave writes to the same product.

Reserving uses a two-phase approach so a batch never stays partially
reserved:

  Phase 1 - validate: load every product once and check that each cell
            can cover the total quantity the batch asks of it. Fails
            before any write.
  Phase 2 - apply: reserve item by item through the ledger. If an item
            still fails here (for example another checkout won the race
            for the same cell), every item already reserved is restored,
            newest first, and the first error propagates.

Releasing tolerates per-item failures: a product that can no longer take
stock back is logged and reported, and the rest of the batch continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from studio30.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
)
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.product import Product
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.model.value_objects import Quantity, StockDirection
from studio30.domain.repository.product_repository import ProductRepository
from studio30.domain.service.stock_ledger import StockAdjustment, StockLedger
from studio30.domain.service.variant_resolver import resolve_size, resolve_variant

logger = logging.getLogger(__name__)


@dataclass
class ReleaseSummary:
    released: list[StockAdjustment] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def error(self) -> str | None:
        return "; ".join(self.errors) if self.errors else None


class StockBatchService:

    def __init__(self, ledger: StockLedger, product_repo: ProductRepository) -> None:
        self._ledger = ledger
        self._product_repo = product_repo

    def reserve_items(
        self,
        items: list[LineItem],
        movement_type: MovementType = MovementType.RESERVATION_OUT,
        order_id: int | None = None,
    ) -> list[StockAdjustment]:
        """Reserve stock for every item that has a size selected."""
        lines = _stock_lines(items)

        # Phase 1: validate against one fresh read per product
        self._validate_availability(lines)

        # Phase 2: apply, compensating on failure
        applied: list[StockAdjustment] = []
        for line in lines:
            try:
                applied.append(
                    self._ledger.adjust_stock(
                        line.product_id,
                        line.quantity.value,
                        line.color_or_generic,
                        line.selected_size,
                        StockDirection.RESERVE,
                        movement_type=movement_type,
                        order_id=order_id,
                    )
                )
            except DomainException as exc:
                logger.error(
                    "Reservation of product %s failed after %d applied item(s): %s",
                    line.product_id, len(applied), exc,
                )
                self.restore_adjustments(applied, order_id=order_id)
                raise
        return applied

    def release_items(
        self,
        items: list[LineItem],
        movement_type: MovementType = MovementType.RESERVATION_RESTORE,
        order_id: int | None = None,
    ) -> ReleaseSummary:
        """Restore stock for every item that has a size selected."""
        summary = ReleaseSummary()
        for line in _stock_lines(items):
            try:
                summary.released.append(
                    self._ledger.adjust_stock(
                        line.product_id,
                        line.quantity.value,
                        line.color_or_generic,
                        line.selected_size,
                        StockDirection.RESTORE,
                        movement_type=movement_type,
                        order_id=order_id,
                    )
                )
            except DomainException as exc:
                logger.error("Could not restore stock of product %s: %s", line.product_id, exc)
                summary.errors.append(f"product {line.product_id}: {exc}")
        return summary

    def restore_adjustments(
        self,
        adjustments: list[StockAdjustment],
        movement_type: MovementType = MovementType.RESERVATION_RESTORE,
        order_id: int | None = None,
    ) -> ReleaseSummary:
        """Give back reservations this service applied, newest first.

        Each adjustment goes back to the exact cell it was taken from.
        Failures are logged and reported; the rest are still restored.
        """
        summary = ReleaseSummary()
        for adjustment in reversed(adjustments):
            try:
                summary.released.append(
                    self._ledger.adjust_stock(
                        adjustment.product.id,
                        adjustment.quantity,
                        adjustment.color_name,
                        adjustment.size,
                        StockDirection.RESTORE,
                        movement_type=movement_type,
                        order_id=order_id,
                    )
                )
            except DomainException as exc:
                logger.exception(
                    "Compensation failed: %d x %s/%s of product %s stays reserved",
                    adjustment.quantity, adjustment.color_name, adjustment.size,
                    adjustment.product.id,
                )
                summary.errors.append(f"product {adjustment.product.id}: {exc}")
        return summary

    # --- Internal helpers -----------------------------------------------------

    def _validate_availability(self, lines: list[LineItem]) -> None:
        products: dict[int, Product] = {}
        demand: dict[tuple[int, int | None, int | None], int] = {}

        for line in lines:
            product = products.get(line.product_id)
            if product is None:
                product = self._product_repo.get_by_id(line.product_id)
                if product is None:
                    raise ProductNotFoundError(line.product_id)
                products[line.product_id] = product

            variant_match = resolve_variant(
                product, line.color_or_generic, StockDirection.RESERVE
            )
            size_match = resolve_size(
                product, variant_match.variant, line.selected_size, StockDirection.RESERVE
            )

            key = (product.id, variant_match.index, size_match.index)
            demand[key] = demand.get(key, 0) + line.quantity.value
            available = size_match.cell.quantity
            if demand[key] > available:
                raise InsufficientStockError(
                    product.name, variant_match.variant.color_name, size_match.cell.size,
                    requested=demand[key], available=available,
                )


def adjustments_to_items(adjustments: list[StockAdjustment]) -> list[LineItem]:
    """Line items that point straight at the cells the adjustments touched."""
    return [
        LineItem(
            product_id=adjustment.product.id,
            quantity=Quantity(adjustment.quantity),
            selected_color=adjustment.color_name,
            selected_size=adjustment.size,
        )
        for adjustment in adjustments
    ]


def _stock_lines(items: list[LineItem]) -> list[LineItem]:
    lines = [item for item in items if item.touches_stock]
    skipped = len(items) - len(lines)
    if skipped:
        logger.debug("Skipping %d item(s) without a selected size", skipped)
    return lines
