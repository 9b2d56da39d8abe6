"""Unit tests for the Order aggregate and its status lifecycle."""

import pytest

from storefront.domain.exceptions import InvalidStatusTransitionError, ValidationError
from storefront.domain.model.order import (
    Order,
    OrderLine,
    OrderStatus,
    PaymentMethod,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress

ADDRESS = ShippingAddress("1 Main St", "Springfield", "IL", "62701")


def _make_line(title: str = "Shirt", qty: int = 1, price: str = "15.00") -> OrderLine:
    """Helper to build a valid order line."""
    return OrderLine(
        product_id="p1",
        title=title,
        description="desc",
        size="M",
        color="red",
        quantity=Quantity(qty),
        price=Money.of(price),
    )


def _make_order(status: OrderStatus = OrderStatus.PENDING) -> Order:
    order = Order.create("o1", "u1", [_make_line()], PaymentMethod.CARD, ADDRESS)
    order.status = status
    return order


class TestOrderCreation:

    def test_total_is_sum_of_line_totals(self):
        order = Order.create(
            "o1",
            "u1",
            [_make_line(qty=2, price="15.00"), _make_line(qty=1, price="5.50")],
            PaymentMethod.CASH,
            ADDRESS,
        )
        assert order.total_amount == Money.of("35.50")
        assert order.status is OrderStatus.PENDING

    def test_empty_order_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("o1", "u1", [], PaymentMethod.CASH, ADDRESS)

    def test_guest_order(self):
        order = Order.create("o1", None, [_make_line()], PaymentMethod.CASH, ADDRESS)
        assert order.is_guest
        assert not order.is_owned_by(None)

    def test_unknown_payment_method(self):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            PaymentMethod.parse("bitcoin")

    def test_unknown_status(self):
        with pytest.raises(ValidationError, match="Invalid status value"):
            OrderStatus.parse("lost")


class TestStatusTransitions:

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.PROCESSING),
            (OrderStatus.PENDING, OrderStatus.CANCELLED),
            (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
            (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
            (OrderStatus.SHIPPED, OrderStatus.DELIVERED),
        ],
    )
    def test_allowed(self, start, target):
        order = _make_order(start)
        order.transition_to(target)
        assert order.status is target

    @pytest.mark.parametrize(
        "start, target",
        [
            (OrderStatus.PENDING, OrderStatus.DELIVERED),
            (OrderStatus.SHIPPED, OrderStatus.PENDING),
            (OrderStatus.DELIVERED, OrderStatus.PROCESSING),
            (OrderStatus.CANCELLED, OrderStatus.PENDING),
        ],
    )
    def test_rejected(self, start, target):
        order = _make_order(start)
        with pytest.raises(InvalidStatusTransitionError, match="Cannot change order status"):
            order.transition_to(target)
        assert order.status is start


class TestCancel:

    @pytest.mark.parametrize("start", [OrderStatus.PENDING, OrderStatus.PROCESSING])
    def test_cancellable(self, start):
        order = _make_order(start)
        order.cancel()
        assert order.status is OrderStatus.CANCELLED

    @pytest.mark.parametrize("start", [OrderStatus.SHIPPED, OrderStatus.DELIVERED])
    def test_shipped_or_delivered_cannot_be_cancelled(self, start):
        with pytest.raises(InvalidStatusTransitionError, match="shipped or delivered"):
            _make_order(start).cancel()

    def test_cancel_twice_rejected(self):
        order = _make_order()
        order.cancel()
        with pytest.raises(InvalidStatusTransitionError, match="already cancelled"):
            order.cancel()
