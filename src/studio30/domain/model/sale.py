"""Sale (venda): a completed purchase that permanently takes stock out."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from studio30.domain.exceptions import ValidationError
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.value_objects import Money

PAYMENT_METHODS = frozenset(
    {"pix", "debit", "card_machine", "credito_parcelado", "fiado",
     "fiado_parcelado", "cash", "card"}
)


@dataclass
class Sale:
    id: int | None
    customer_name: str
    items: list[LineItem]
    payment_method: str
    order_id: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        customer_name: str,
        items: list[LineItem],
        payment_method: str,
        order_id: int | None = None,
    ) -> Sale:
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if not items:
            raise ValidationError("Sale must contain at least one item")
        if payment_method not in PAYMENT_METHODS:
            raise ValidationError(
                f"Unknown payment method '{payment_method}'. "
                f"Expected one of: {', '.join(sorted(PAYMENT_METHODS))}"
            )
        return Sale(
            id=None,
            customer_name=customer_name.strip(),
            items=list(items),
            payment_method=payment_method,
            order_id=order_id,
        )

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
