"""Application service: Create Sale (venda) use case.

A sale always takes its garments out of stock, even when it comes from a
malinha: the malinha gives its own reservation back when its status
changes, so the two never double count.
"""

from __future__ import annotations

from studio30.application.dto import LineItemSpec, SaleDTO
from studio30.application.show_order import item_to_dto
from studio30.domain.exceptions import DomainException
from studio30.domain.model.line_item import GENERIC_COLOR, ONE_SIZE, LineItem
from studio30.domain.model.sale import Sale
from studio30.domain.model.stock_movement import MovementType
from studio30.domain.model.value_objects import Money, Quantity
from studio30.domain.repository.sale_repository import SaleRepository
from studio30.domain.service.stock_batch_service import StockBatchService


class CreateSaleHandler:

    def __init__(
        self,
        sale_repo: SaleRepository,
        batch_service: StockBatchService,
    ) -> None:
        self._sale_repo = sale_repo
        self._batch_service = batch_service

    def handle(
        self,
        customer_name: str,
        item_specs: list[LineItemSpec],
        payment_method: str,
        order_id: int | None = None,
    ) -> SaleDTO:
        # Sales are rung up at the counter: fill in what was left blank.
        items = [
            LineItem(
                product_id=spec.product_id,
                quantity=Quantity(spec.quantity or 1),
                selected_color=spec.color or GENERIC_COLOR,
                selected_size=spec.size or ONE_SIZE,
                unit_price=Money.of(spec.price),
            )
            for spec in item_specs
        ]
        sale = Sale.create(
            customer_name=customer_name,
            items=items,
            payment_method=payment_method,
            order_id=order_id,
        )

        applied = self._batch_service.reserve_items(
            sale.items, movement_type=MovementType.SALE, order_id=order_id
        )
        try:
            self._sale_repo.save(sale)
        except DomainException:
            # Unrecorded sale: the garments go back on the rail.
            self._batch_service.restore_adjustments(
                applied, movement_type=MovementType.ENTRY, order_id=order_id
            )
            raise

        return SaleDTO(
            id=sale.id,  # type: ignore[arg-type]
            customer_name=sale.customer_name,
            payment_method=sale.payment_method,
            order_id=sale.order_id,
            items=[item_to_dto(item) for item in sale.items],
            total=str(sale.total),
        )
