"""Integration tests for the order use cases.

Uses in-memory fake repositories, no file I/O.
"""

import pytest

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import GuestLineSpec
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListUserOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InsufficientStockError,
    InvalidStatusTransitionError,
    MissingFieldError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money, new_id
from tests.builders import make_product, make_variant
from tests.fakes import FakeCartRepository, FakeOrderRepository, FakeProductRepository

ADDRESS = {"street": "1 Main St", "city": "Springfield", "state": "IL", "postal_code": "62701"}


def _setup():
    """Two products; user u1 holds a two-line cart totalling 2*15 + 1*25."""
    shirt_variant = make_variant("S1", color="white", size="M", stock=10)
    hat_variant = make_variant("H1", color="black", size="OS", stock=3)
    shirt = make_product(title="Shirt", price="15.00", variants=[shirt_variant])
    hat = make_product(title="Hat", price="25.00", variants=[hat_variant])

    cart = Cart(user_id="u1")
    cart.add_item(shirt.id, shirt_variant, 2, shirt.unit_price)
    cart.add_item(hat.id, hat_variant, 1, hat.unit_price)

    orders = FakeOrderRepository()
    carts = FakeCartRepository([cart])
    products = FakeProductRepository([shirt, hat])
    handler = CreateOrderHandler(orders, carts, products)
    return handler, orders, carts, products, shirt, hat


class TestCreateOrderFromCart:

    def test_creates_order_with_correct_total(self):
        handler, orders, _, _, _, _ = _setup()
        dto = handler.handle("u1", "card", ADDRESS)
        assert dto.total_amount == "55.00"
        assert dto.status == "pending"
        assert dto.user_id == "u1"
        assert len(dto.lines) == 2
        assert orders.get_by_id(dto.id) is not None

    def test_cart_is_deleted_afterwards(self):
        handler, _, carts, _, _, _ = _setup()
        handler.handle("u1", "cash", ADDRESS)
        assert carts.get_by_user("u1") is None

    def test_stock_is_not_decremented(self):
        handler, _, _, products, shirt, _ = _setup()
        handler.handle("u1", "cash", ADDRESS)
        assert products.get_by_id(shirt.id).find_variant("S1").stock == 10

    def test_price_snapshot_survives_catalog_change(self):
        handler, orders, _, products, shirt, _ = _setup()
        dto = handler.handle("u1", "card", ADDRESS)

        changed = products.get_by_id(shirt.id)
        changed.update_details(title="Renamed", price=Money.of("99.99"))
        products.save(changed)

        saved = orders.get_by_id(dto.id)
        assert saved.lines[0].title == "Shirt"
        assert saved.lines[0].price == Money.of("15.00")

    def test_stale_stock_rejected_and_cart_kept(self):
        handler, orders, carts, products, _, hat = _setup()
        drained = products.get_by_id(hat.id)
        drained.adjust_stock("H1", -3)
        products.save(drained)

        with pytest.raises(InsufficientStockError, match="Insufficient stock for product: Hat"):
            handler.handle("u1", "card", ADDRESS)
        assert orders.list_all() == []
        assert carts.get_by_user("u1") is not None

    def test_missing_cart(self):
        handler, _, _, _, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Cart is empty or not found"):
            handler.handle("u2", "card", ADDRESS)

    @pytest.mark.parametrize("method, address", [(None, ADDRESS), ("card", None), ("", {})])
    def test_missing_fields(self, method, address):
        handler, _, _, _, _, _ = _setup()
        with pytest.raises(MissingFieldError, match="Payment method and shipping address are required"):
            handler.handle("u1", method, address)

    def test_unknown_payment_method(self):
        handler, _, _, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid payment method"):
            handler.handle("u1", "cheque", ADDRESS)

    def test_guest_cart_while_signed_in_rejected(self):
        handler, _, _, _, shirt, _ = _setup()
        with pytest.raises(ValidationError, match="guest cart"):
            handler.handle("u1", "card", ADDRESS, [GuestLineSpec(shirt.id, "S1", 1)])


class TestCreateGuestOrder:

    def test_guest_order(self):
        handler, orders, _, products, shirt, hat = _setup()
        dto = handler.handle(
            None,
            "cash",
            ADDRESS,
            [GuestLineSpec(shirt.id, "S1", 1), GuestLineSpec(hat.id, "H1", 2)],
        )
        assert dto.user_id is None
        assert dto.total_amount == "65.00"
        assert products.get_many_calls == 1
        assert orders.get_by_id(dto.id).is_guest

    def test_guest_order_needs_lines(self):
        handler, _, _, _, _, _ = _setup()
        with pytest.raises(ValidationError, match="No cart data provided"):
            handler.handle(None, "cash", ADDRESS, [])

    def test_guest_unknown_product(self):
        handler, _, _, _, _, _ = _setup()
        missing = new_id()
        with pytest.raises(EntityNotFoundError, match=f"Product not found: {missing}"):
            handler.handle(None, "cash", ADDRESS, [GuestLineSpec(missing, "S1", 1)])

    def test_guest_malformed_product_id(self):
        handler, orders, _, products, shirt, _ = _setup()
        lines = [GuestLineSpec(shirt.id, "S1", 1), GuestLineSpec("not-an-id", "S1", 1)]
        with pytest.raises(ValidationError, match="Invalid product ID"):
            handler.handle(None, "cash", ADDRESS, lines)
        assert products.get_many_calls == 0
        assert orders.list_all() == []

    def test_guest_unknown_variant(self):
        handler, _, _, _, shirt, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Variant not found for product: Shirt"):
            handler.handle(None, "cash", ADDRESS, [GuestLineSpec(shirt.id, "XX", 1)])

    def test_guest_insufficient_stock(self):
        handler, _, _, _, _, hat = _setup()
        with pytest.raises(InsufficientStockError, match="Hat"):
            handler.handle(None, "cash", ADDRESS, [GuestLineSpec(hat.id, "H1", 4)])

    def test_guest_lines_for_same_variant_share_stock(self):
        handler, orders, _, _, _, hat = _setup()
        lines = [GuestLineSpec(hat.id, "H1", 2), GuestLineSpec(hat.id, "H1", 2)]
        with pytest.raises(InsufficientStockError, match="Hat"):
            handler.handle(None, "cash", ADDRESS, lines)
        assert orders.list_all() == []

    def test_guest_lines_for_same_variant_within_stock(self):
        handler, _, _, _, _, hat = _setup()
        lines = [GuestLineSpec(hat.id, "H1", 2), GuestLineSpec(hat.id, "H1", 1)]
        dto = handler.handle(None, "cash", ADDRESS, lines)
        assert dto.total_amount == "75.00"


class TestOrderLifecycle:

    def _placed(self):
        handler, orders, _, _, _, _ = _setup()
        dto = handler.handle("u1", "card", ADDRESS)
        return orders, dto.id

    def test_show_own_order(self):
        orders, order_id = self._placed()
        assert ShowOrderHandler(orders).handle(order_id, "u1").id == order_id

    def test_someone_elses_order_looks_missing(self):
        orders, order_id = self._placed()
        with pytest.raises(EntityNotFoundError, match="don't have access"):
            ShowOrderHandler(orders).handle(order_id, "intruder")

    def test_malformed_order_id(self):
        orders, _ = self._placed()
        with pytest.raises(ValidationError, match="Invalid order ID"):
            ShowOrderHandler(orders).handle("not-an-id", "u1")
        with pytest.raises(ValidationError, match="Invalid order ID"):
            CancelOrderHandler(orders).handle("not-an-id", "u1")

    def test_list_user_orders(self):
        orders, order_id = self._placed()
        assert [o.id for o in ListUserOrdersHandler(orders).handle("u1")] == [order_id]
        assert ListUserOrdersHandler(orders).handle("u2") == []

    def test_list_all_requires_admin(self):
        orders, _ = self._placed()
        with pytest.raises(ForbiddenError):
            ListAllOrdersHandler(orders).handle("user")
        assert len(ListAllOrdersHandler(orders).handle("admin")) == 1

    def test_status_walk_to_delivered(self):
        orders, order_id = self._placed()
        handler = UpdateOrderStatusHandler(orders)
        for status in ("processing", "shipped", "delivered"):
            dto = handler.handle(order_id, "u1", status)
        assert dto.status == "delivered"
        assert orders.get_by_id(order_id).status.value == "delivered"

    def test_illegal_transition(self):
        orders, order_id = self._placed()
        with pytest.raises(InvalidStatusTransitionError):
            UpdateOrderStatusHandler(orders).handle(order_id, "u1", "delivered")

    def test_status_required(self):
        orders, order_id = self._placed()
        with pytest.raises(MissingFieldError, match="Status is required"):
            UpdateOrderStatusHandler(orders).handle(order_id, "u1", None)

    def test_cancel(self):
        orders, order_id = self._placed()
        assert CancelOrderHandler(orders).handle(order_id, "u1").status == "cancelled"

    def test_cancel_after_shipping_rejected(self):
        orders, order_id = self._placed()
        status = UpdateOrderStatusHandler(orders)
        status.handle(order_id, "u1", "processing")
        status.handle(order_id, "u1", "shipped")
        with pytest.raises(InvalidStatusTransitionError, match="shipped or delivered"):
            CancelOrderHandler(orders).handle(order_id, "u1")
