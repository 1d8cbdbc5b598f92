"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from studio30.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a fresh copy of a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Replace ``variants``, ``stock`` and ``updated_at`` of a stored product.

        The write only succeeds if the stored version still equals
        ``product.version``; on success ``product.version`` is incremented.
        Raises ConcurrentUpdateError when the versions differ and
        ProductNotFoundError when the row is gone.
        """
