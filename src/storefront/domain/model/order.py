"""Order aggregate: an immutable snapshot of what was bought.

Every OrderLine copies the product fields it needs (title, description,
price, images, size, color) at creation time, so later catalog changes never
rewrite history. The status is the only field that changes afterwards, and
only along the transitions in ``ALLOWED_TRANSITIONS``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    InvalidStatusTransitionError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @staticmethod
    def parse(value: str) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            raise ValidationError("Invalid status value") from None


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"

    @staticmethod
    def parse(value: str) -> PaymentMethod:
        try:
            return PaymentMethod(value)
        except ValueError:
            raise ValidationError(
                f"Invalid payment method '{value}' (expected cash or card)"
            ) from None


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderLine:
    """Product fields frozen at order-creation time."""

    product_id: str
    title: str
    description: str
    size: str
    color: str
    quantity: Quantity
    price: Money  # unit price paid
    images: tuple[str, ...] = ()

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders.

    Use ``Order.create()`` for new orders. ``__init__`` is kept simple so
    the repository can reconstitute persisted orders without re-validating.
    """

    id: str
    user_id: str | None
    lines: list[OrderLine]
    total_amount: Money
    payment_method: PaymentMethod
    shipping_address: ShippingAddress
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        user_id: str | None,
        lines: list[OrderLine],
        payment_method: PaymentMethod,
        shipping_address: ShippingAddress,
    ) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for line in lines:
            total = total + line.line_total

        return Order(
            id=id,
            user_id=user_id,
            lines=list(lines),
            total_amount=total,
            payment_method=payment_method,
            shipping_address=shipping_address,
        )

    # --- Status transitions ---------------------------------------------------

    @property
    def is_guest(self) -> bool:
        return self.user_id is None

    def is_owned_by(self, user_id: str | None) -> bool:
        return user_id is not None and self.user_id == user_id

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, target: OrderStatus) -> None:
        if not self.can_transition_to(target):
            raise InvalidStatusTransitionError(
                f"Cannot change order status from {self.status.value} to {target.value}"
            )
        self.status = target

    def cancel(self) -> None:
        if self.status in (OrderStatus.SHIPPED, OrderStatus.DELIVERED):
            raise InvalidStatusTransitionError(
                "Cannot cancel an order that has been shipped or delivered"
            )
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStatusTransitionError("Order is already cancelled")
        self.transition_to(OrderStatus.CANCELLED)
