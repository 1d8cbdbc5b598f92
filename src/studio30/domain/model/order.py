"""Order aggregate: a customer's order or malinha (trial bag).

The Order is an aggregate root that owns its line items. Whether the
order currently holds stock is decided by its status alone; the stock
ledger movements themselves are coordinated by the application handlers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from studio30.domain.exceptions import ValidationError
from studio30.domain.model.line_item import LineItem
from studio30.domain.model.value_objects import Money


class OrderStatus(Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    RETURNED = "returned"
    CANCELLED = "cancelled"

    @property
    def holds_stock(self) -> bool:
        return self in STATUSES_HOLDING_STOCK


STATUSES_HOLDING_STOCK = frozenset(
    {OrderStatus.PENDING, OrderStatus.ACTIVE, OrderStatus.SHIPPED}
)

MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for orders and malinhas.

    Use the ``Order.create()`` factory for new orders; it enforces all
    business rules. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_name: str
    items: list[LineItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        items: list[LineItem],
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        _check_items(items)
        return Order(
            id=None,
            customer_name=customer_name.strip(),
            items=list(items),
            status=status,
        )

    # --- Mutations ------------------------------------------------------------

    def replace_items(self, items: list[LineItem]) -> None:
        self._assert_open()
        _check_items(items)
        self.items = list(items)

    def change_status(self, status: OrderStatus) -> None:
        self._assert_open()
        self.status = status

    def activate(self) -> None:
        """Transition PENDING -> ACTIVE (the malinha leaves the shop)."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError(
                f"Cannot activate order: current status is {self.status.value}, "
                f"expected pending"
            )
        self.status = OrderStatus.ACTIVE

    def mark_returned(self) -> None:
        """Transition ACTIVE|SHIPPED -> RETURNED (the garments are back)."""
        if self.status not in (OrderStatus.ACTIVE, OrderStatus.SHIPPED):
            raise ValidationError(
                f"Cannot return order in {self.status.value} status"
            )
        self.status = OrderStatus.RETURNED

    # --- Computed properties --------------------------------------------------

    @property
    def holds_stock(self) -> bool:
        return self.status.holds_stock

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def _assert_open(self) -> None:
        if self.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED):
            raise ValidationError(
                f"Order #{self.id} is {self.status.value} and can no longer change"
            )


def _check_items(items: list[LineItem]) -> None:
    if not items:
        raise ValidationError("Order must contain at least one item")
    if len(items) > MAX_LINE_ITEMS:
        raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
