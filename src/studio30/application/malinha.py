"""Application services: malinha (trial bag) lifecycle.

A malinha is an order whose garments leave the shop for the customer to
try. Activating it keeps the reservation in place; returning it gives
every garment back to stock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from studio30.application.dto import OrderDTO
from studio30.application.show_order import order_to_dto
from studio30.application.update_order import reconcile_order_stock
from studio30.domain.exceptions import EntityNotFoundError
from studio30.domain.model.order import Order
from studio30.domain.repository.order_repository import OrderRepository
from studio30.domain.service.stock_batch_service import StockBatchService


class _MalinhaTransitionHandler(ABC):

    def __init__(
        self,
        order_repo: OrderRepository,
        batch_service: StockBatchService,
    ) -> None:
        self._order_repo = order_repo
        self._batch_service = batch_service

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Malinha #{order_id} not found")

        previously_holding = order.holds_stock
        self._transition(order)
        reconcile_order_stock(
            self._batch_service, order, list(order.items), previously_holding
        )

        self._order_repo.save(order)
        return order_to_dto(order)

    @abstractmethod
    def _transition(self, order: Order) -> None:
        """Move ``order`` to its next status."""


class ActivateMalinhaHandler(_MalinhaTransitionHandler):
    """pending -> active. Stock stays reserved."""

    def _transition(self, order: Order) -> None:
        order.activate()


class ReturnMalinhaHandler(_MalinhaTransitionHandler):
    """active|shipped -> returned. Every garment goes back to stock."""

    def _transition(self, order: Order) -> None:
        order.mark_returned()
