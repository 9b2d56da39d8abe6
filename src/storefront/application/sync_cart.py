"""Application service: Sync Cart use case.

Thin wrapper around the CartReconciliationService: the client sends the
cart it holds locally and gets back the merged server cart.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.show_cart import populated_cart_dto
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.cart_reconciliation_service import (
    CartReconciliationService,
)


class SyncCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, items: list[dict]) -> CartDTO:
        svc = CartReconciliationService(self._product_repo, self._cart_repo)
        cart, _ = svc.sync(user_id, items)
        return populated_cart_dto(cart, self._product_repo)
