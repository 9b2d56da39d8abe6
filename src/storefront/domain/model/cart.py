"""Cart aggregate: one per user, an ordered list of line items.

Two lines are the *same line* when they point at the same product and carry
an identical variant descriptor (variant id, size and color). Every line also
has its own opaque ``id`` so clients can update or remove it directly.

``total_amount`` is a running total: it is incremented by ``add_item`` and
never recomputed from scratch, so item mutations must go through the
aggregate's methods.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
)
from storefront.domain.model.product import Variant
from storefront.domain.model.value_objects import (
    Money,
    Quantity,
    VariantDescriptor,
    new_id,
)


class MergeOutcome(Enum):
    ADDED = "added"
    RAISED = "raised"
    UNCHANGED = "unchanged"


@dataclass
class CartItem:
    id: str
    product_id: str
    quantity: int
    variant: VariantDescriptor

    def is_same_line(self, product_id: str, variant: VariantDescriptor) -> bool:
        return self.product_id == product_id and self.variant == variant


@dataclass
class Cart:
    """Aggregate root for a user's cart.

    ``version`` is an optimistic-concurrency token: repositories refuse to
    save a cart whose version no longer matches the stored one.
    """

    user_id: str
    items: list[CartItem] = field(default_factory=list)
    total_amount: Money = field(default_factory=Money.zero)
    version: int = 0
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_empty(self) -> bool:
        return not self.items

    # --- Lookups --------------------------------------------------------------

    def find_line(self, product_id: str, variant: VariantDescriptor) -> CartItem | None:
        for item in self.items:
            if item.is_same_line(product_id, variant):
                return item
        return None

    def find_item(self, item_id: str) -> CartItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    # --- Direct mutations -----------------------------------------------------

    def add_item(
        self,
        product_id: str,
        variant: Variant,
        quantity: int,
        unit_price: Money,
    ) -> CartItem:
        """Add *quantity* units, summing into an identical line if present.

        The combined quantity must fit within the variant's live stock; if it
        does not, the cart is left exactly as it was.
        """
        qty = Quantity(quantity).value
        if not variant.can_cover(qty):
            raise InsufficientStockError("Insufficient stock for this variant")

        descriptor = variant.descriptor()
        item = self.find_line(product_id, descriptor)
        if item is not None:
            combined = item.quantity + qty
            if not variant.can_cover(combined):
                raise InsufficientStockError("Insufficient stock for this variant")
            item.quantity = combined
        else:
            item = CartItem(
                id=new_id(), product_id=product_id, quantity=qty, variant=descriptor
            )
            self.items.append(item)

        self.total_amount = self.total_amount + unit_price * qty
        self._touch()
        return item

    def set_quantity(self, item_id: str, quantity: int, variant: Variant) -> CartItem:
        """Set a line's quantity absolutely (not additive)."""
        qty = Quantity(quantity).value
        item = self.find_item(item_id)
        if item is None:
            raise EntityNotFoundError("Item not found in cart")
        if not variant.can_cover(qty):
            raise InsufficientStockError("Insufficient stock for this variant")
        item.quantity = qty
        self._touch()
        return item

    def remove_item(self, item_id: str) -> None:
        before = len(self.items)
        self.items = [item for item in self.items if item.id != item_id]
        if len(self.items) == before:
            raise EntityNotFoundError("Item not found in cart")
        self._touch()

    # --- Reconciliation -------------------------------------------------------

    def merge_line(self, product_id: str, variant: Variant, quantity: int) -> MergeOutcome:
        """Merge a client-proposed line using max-of-both semantics.

        Never lowers an existing quantity and never applies a quantity the
        variant's live stock cannot cover.
        """
        descriptor = variant.descriptor()
        item = self.find_line(product_id, descriptor)
        if item is None:
            self.items.append(
                CartItem(
                    id=new_id(),
                    product_id=product_id,
                    quantity=quantity,
                    variant=descriptor,
                )
            )
            self._touch()
            return MergeOutcome.ADDED

        merged = max(item.quantity, quantity)
        if merged == item.quantity or not variant.can_cover(merged):
            return MergeOutcome.UNCHANGED
        item.quantity = merged
        self._touch()
        return MergeOutcome.RAISED

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
