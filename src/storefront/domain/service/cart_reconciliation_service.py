"""Domain service: Cart Reconciliation.

Merges a client-held cart snapshot into the authoritative server cart.
This is a best-effort merge: malformed or unsatisfiable lines are skipped,
never rejected wholesale, and the result never violates live stock.

Guarantees:
- Monotonic: an existing line's quantity is never decreased.
- Additive: lines only present server-side are left untouched.
- Idempotent: re-syncing the server's own state changes nothing.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, MergeOutcome
from storefront.domain.model.value_objects import VariantDescriptor
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.variant_matcher import match_variant

logger = structlog.get_logger(__name__)


@dataclass
class SyncReport:
    added: int = 0
    raised: int = 0
    unchanged: int = 0
    skipped: int = 0


class CartReconciliationService:

    def __init__(
        self,
        product_repo: ProductRepository,
        cart_repo: CartRepository,
    ) -> None:
        self._product_repo = product_repo
        self._cart_repo = cart_repo

    def sync(self, user_id: str, proposed_lines: list[dict]) -> tuple[Cart, SyncReport]:
        if not isinstance(proposed_lines, list):
            raise ValidationError("Invalid local cart data")

        cart = self._cart_repo.get_by_user(user_id) or Cart(user_id=user_id)
        report = SyncReport()

        for raw in proposed_lines:
            outcome = self._merge_one(cart, raw)
            if outcome is None:
                report.skipped += 1
            elif outcome is MergeOutcome.ADDED:
                report.added += 1
            elif outcome is MergeOutcome.RAISED:
                report.raised += 1
            else:
                report.unchanged += 1

        self._cart_repo.save(cart)

        logger.info(
            "Cart synced",
            user_id=user_id,
            added=report.added,
            raised=report.raised,
            unchanged=report.unchanged,
            skipped=report.skipped,
        )
        return cart, report

    def _merge_one(self, cart: Cart, raw: object) -> MergeOutcome | None:
        """Merge a single proposed line; None means it was skipped."""
        if not isinstance(raw, dict):
            return None

        product_id = raw.get("product_id")
        quantity = raw.get("quantity")
        descriptor = VariantDescriptor.from_raw(raw.get("variant"))
        if not product_id or descriptor is None:
            return None
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            return None

        product = self._product_repo.get_by_id(str(product_id))
        if product is None or product.is_deleted:
            return None

        variant = match_variant(product, descriptor)
        if variant is None:
            return None

        if not variant.can_cover(quantity):
            logger.debug(
                "Skipping cart line beyond live stock",
                product_id=product.id,
                variant_id=variant.variant_id,
                requested=quantity,
                stock=variant.stock,
            )
            return None

        return cart.merge_line(product.id, variant, quantity)
