"""Abstract repository for Sale records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from studio30.domain.model.sale import Sale


class SaleRepository(ABC):

    @abstractmethod
    def get_by_id(self, sale_id: int) -> Sale | None:
        """Return a sale by its ID, or None if not found."""

    @abstractmethod
    def save(self, sale: Sale) -> None:
        """Persist a new sale, assigning its ID."""
