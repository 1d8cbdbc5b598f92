"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one garment the customer picked."""

    product_id: int
    quantity: int
    color: str | None = None
    size: str | None = None
    price: str = "0"


@dataclass(frozen=True)
class LineItemDTO:
    product_id: int
    quantity: int
    color: str
    size: str
    unit_price: str  # formatted, e.g. "R$ 89.90"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    customer_name: str
    status: str
    holds_stock: bool
    items: list[LineItemDTO]
    total: str
    created_at: str


@dataclass(frozen=True)
class SaleDTO:
    id: int
    customer_name: str
    payment_method: str
    order_id: int | None
    items: list[LineItemDTO]
    total: str


@dataclass(frozen=True)
class StockAdjustmentDTO:
    product_id: int
    direction: str
    quantity: int
    color: str
    size: str
    previous_quantity: int
    new_quantity: int
    total_stock: int


@dataclass(frozen=True)
class SizeStockDTO:
    color: str
    size: str
    quantity: int


@dataclass(frozen=True)
class ProductStockDTO:
    product_id: int
    name: str
    default_color: str
    total: int
    cells: list[SizeStockDTO]


@dataclass(frozen=True)
class MovementDTO:
    created_at: str
    movement_type: str
    quantity: int
    notes: str
    order_id: int | None


@dataclass(frozen=True)
class ImportResultDTO:
    added: list[int]
    skipped: list[int]
