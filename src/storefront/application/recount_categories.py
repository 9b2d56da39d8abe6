"""Application service: Recount category product counters."""

from __future__ import annotations

from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.category_counter_service import CategoryCounterService


class RecountCategoriesHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self) -> dict[str, tuple[int, int]]:
        """Rebuild every counter; returns ``{slug: (was, now)}`` for the ones fixed."""
        svc = CategoryCounterService(self._category_repo)
        return svc.recount(self._product_repo)
