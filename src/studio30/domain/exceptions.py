"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Stock errors come in two families:

- ``ValidationError`` subclasses mean "bad request given current state"
  (unknown colour or size, not enough stock).
- ``PersistenceError`` subclasses mean the store itself failed, including a
  lost compare-and-swap on the product version.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class VariantNotFoundError(ValidationError):
    """No variant of the product matches the requested colour."""

    def __init__(self, product_id: int, product_name: str, color: str,
                 available: list[str]) -> None:
        super().__init__(
            f"Color \"{color}\" not found in product {product_id} "
            f"(\"{product_name}\"). Available colors: {', '.join(available) or '-'}"
        )
        self.product_id = product_id
        self.color = color
        self.available = available


class SizeNotFoundError(ValidationError):
    """The matched variant has no cell for the requested size."""

    def __init__(self, product_id: int, color_name: str, size: str,
                 available: list[str]) -> None:
        super().__init__(
            f"Size \"{size}\" not found in color \"{color_name}\" for product "
            f"{product_id}. Available sizes: {', '.join(available) or '-'}"
        )
        self.product_id = product_id
        self.size = size
        self.available = available


class InsufficientStockError(ValidationError):
    """Reserving would drive a size cell below zero."""

    def __init__(self, product_name: str, color_name: str, size: str,
                 requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} ({color_name}/{size}). "
            f"Requested: {requested}, Available: {available}"
        )
        self.requested = requested
        self.available = available


class PersistenceError(DomainException):
    """Reading from or writing to the underlying store failed."""


class ConcurrentUpdateError(PersistenceError):
    """The product changed between read and write; nothing was written."""

    def __init__(self, product_id: int, expected_version: int) -> None:
        super().__init__(
            f"Product {product_id} was modified concurrently "
            f"(expected version {expected_version})"
        )
        self.product_id = product_id
        self.expected_version = expected_version
