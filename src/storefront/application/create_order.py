"""Application service: Create Order use case (order materialization).

Freezes either the authenticated user's cart or a guest checkout payload
into an immutable Order. Two modes, chosen by whether a user is present:

- Authenticated: snapshot every cart line, then re-fetch each product and
  re-check its variant against live stock before committing. The order is
  stored first and the cart deleted afterwards, so a crash in between
  leaves a cart that outlives its order rather than a lost order.
- Guest: resolve all products in one batch and validate each line, failing
  fast on the first bad product, variant or stock level. Quantities for the
  same variant are summed before the stock check.

Stock is validated here, never decremented.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import GuestLineSpec, OrderDTO, order_to_dto
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    MissingFieldError,
    ValidationError,
)
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import Order, OrderLine, PaymentMethod
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import (
    Quantity,
    ShippingAddress,
    ensure_valid_id,
    new_id,
)
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.variant_matcher import match_variant

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        user_id: str | None,
        payment_method: str | None,
        shipping_address: dict | None,
        guest_cart: list[GuestLineSpec] | None = None,
    ) -> OrderDTO:
        if not payment_method or not shipping_address:
            raise MissingFieldError("Payment method and shipping address are required")
        if not isinstance(shipping_address, dict):
            raise ValidationError("Shipping address must be an object")
        method = PaymentMethod.parse(payment_method)
        address = ShippingAddress.from_raw(shipping_address)

        if user_id is not None:
            if guest_cart:
                raise ValidationError("A guest cart cannot be used while signed in")
            lines = self._lines_from_cart(user_id)
        else:
            lines = self._lines_from_guest_cart(guest_cart)

        order = Order.create(
            id=new_id(),
            user_id=user_id,
            lines=lines,
            payment_method=method,
            shipping_address=address,
        )
        self._order_repo.save(order)

        if user_id is not None:
            self._cart_repo.delete(user_id)

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user_id,
            guest=order.is_guest,
            lines=len(order.lines),
            total=order.total_amount.plain,
        )
        return order_to_dto(order)

    # --- Authenticated checkout -----------------------------------------------

    def _lines_from_cart(self, user_id: str) -> list[OrderLine]:
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None or cart.is_empty:
            raise EntityNotFoundError("Cart is empty or not found")

        lines = self._snapshot_cart(cart)

        # Re-read live stock: the cart may be stale relative to the catalog.
        for item, line in zip(cart.items, lines):
            live = self._product_repo.get_by_id(item.product_id)
            variant = None
            if live is not None and not live.is_deleted:
                variant = match_variant(live, item.variant)
            if variant is None or not variant.can_cover(item.quantity):
                raise InsufficientStockError(f"Insufficient stock for product: {line.title}")

        return lines

    def _snapshot_cart(self, cart: Cart) -> list[OrderLine]:
        lines: list[OrderLine] = []
        for item in cart.items:
            product = self._product_repo.get_by_id(item.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: {item.product_id}")
            lines.append(
                _snapshot(product, item.variant.size, item.variant.color, item.quantity)
            )
        return lines

    # --- Guest checkout -------------------------------------------------------

    def _lines_from_guest_cart(self, guest_cart: list[GuestLineSpec] | None) -> list[OrderLine]:
        if not guest_cart:
            raise ValidationError("No cart data provided")
        for spec in guest_cart:
            ensure_valid_id(spec.product_id, "product")

        products = {
            p.id: p
            for p in self._product_repo.get_many([spec.product_id for spec in guest_cart])
        }

        lines: list[OrderLine] = []
        # Lines naming the same variant draw on one stock count.
        requested: dict[tuple[str, str], int] = {}
        for spec in guest_cart:
            product = products.get(spec.product_id)
            if product is None or product.is_deleted:
                raise EntityNotFoundError(f"Product not found: {spec.product_id}")

            variant = product.find_variant(spec.variant_id)
            if variant is None:
                raise EntityNotFoundError(f"Variant not found for product: {product.title}")

            quantity = Quantity(spec.quantity).value
            key = (product.id, variant.variant_id)
            requested[key] = requested.get(key, 0) + quantity
            if not variant.can_cover(requested[key]):
                raise InsufficientStockError(f"Insufficient stock for product: {product.title}")

            lines.append(_snapshot(product, variant.size, variant.color, quantity))
        return lines


def _snapshot(product: Product, size: str, color: str, quantity: int) -> OrderLine:
    return OrderLine(
        product_id=product.id,
        title=product.title,
        description=product.description,
        size=size,
        color=color,
        quantity=Quantity(quantity),
        price=product.unit_price,  # <-- price snapshot
        images=tuple(product.images),
    )
