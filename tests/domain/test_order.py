"""Unit tests for the Order aggregate, line items and sales."""

from decimal import Decimal

import pytest

from studio30.domain.exceptions import ValidationError
from studio30.domain.model.line_item import GENERIC_COLOR, LineItem
from studio30.domain.model.order import MAX_LINE_ITEMS, Order, OrderStatus
from studio30.domain.model.sale import Sale
from studio30.domain.model.value_objects import Money, Quantity


def _item(qty=1, price="10.00", color="Preto", size="M"):
    return LineItem(1, Quantity(qty), color, size, Money.of(price))


class TestLineItem:

    def test_line_total(self):
        assert _item(3, "19.90").line_total == Money(Decimal("59.70"))

    def test_missing_color_reads_as_generic(self):
        assert _item(color=None).color_or_generic == GENERIC_COLOR

    @pytest.mark.parametrize("size, expected", [("M", True), ("", False), (None, False), ("  ", False)])
    def test_touches_stock_only_with_size(self, size, expected):
        assert _item(size=size).touches_stock is expected


class TestOrderCreate:

    def test_create_strips_name_and_defaults_to_pending(self):
        order = Order.create("  Ana  ", [_item()])
        assert order.customer_name == "Ana"
        assert order.status is OrderStatus.PENDING
        assert order.id is None

    def test_requires_customer(self):
        with pytest.raises(ValidationError, match="Customer name is required"):
            Order.create("  ", [_item()])

    def test_requires_items(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("Ana", [])

    def test_item_limit(self):
        with pytest.raises(ValidationError, match=f"Maximum {MAX_LINE_ITEMS}"):
            Order.create("Ana", [_item()] * (MAX_LINE_ITEMS + 1))

    def test_total(self):
        order = Order.create("Ana", [_item(2, "10.00"), _item(1, "5.50")])
        assert order.total == Money.of("25.50")


class TestOrderStatus:

    @pytest.mark.parametrize("status, holds", [
        (OrderStatus.PENDING, True),
        (OrderStatus.ACTIVE, True),
        (OrderStatus.SHIPPED, True),
        (OrderStatus.COMPLETED, False),
        (OrderStatus.RETURNED, False),
        (OrderStatus.CANCELLED, False),
    ])
    def test_holds_stock(self, status, holds):
        assert status.holds_stock is holds

    def test_activate_only_from_pending(self):
        order = Order.create("Ana", [_item()])
        order.activate()
        assert order.status is OrderStatus.ACTIVE
        with pytest.raises(ValidationError, match="expected pending"):
            order.activate()

    def test_return_from_active_or_shipped(self):
        order = Order.create("Ana", [_item()], status=OrderStatus.SHIPPED)
        order.mark_returned()
        assert order.status is OrderStatus.RETURNED

    def test_cannot_return_pending(self):
        with pytest.raises(ValidationError, match="Cannot return order in pending"):
            Order.create("Ana", [_item()]).mark_returned()

    @pytest.mark.parametrize("status", [OrderStatus.COMPLETED, OrderStatus.CANCELLED])
    def test_closed_orders_cannot_change(self, status):
        order = Order.create("Ana", [_item()], status=status)
        with pytest.raises(ValidationError, match="can no longer change"):
            order.replace_items([_item(2)])
        with pytest.raises(ValidationError, match="can no longer change"):
            order.change_status(OrderStatus.PENDING)


class TestSale:

    def test_create(self):
        sale = Sale.create("Bia", [_item(2, "30.00")], "pix", order_id=3)
        assert sale.total == Money.of("60.00")
        assert sale.order_id == 3

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError, match="Unknown payment method 'bitcoin'"):
            Sale.create("Bia", [_item()], "bitcoin")

    def test_requires_items(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Sale.create("Bia", [], "pix")
