"""Domain service: Category Counter maintenance.

Keeps ``Category.product_count`` in step with product writes. Counters are
adjusted incrementally on create/update/delete, so a missed adjustment
drifts permanently; ``recount`` rebuilds every counter from the products
themselves and reports what it corrected.
"""

from __future__ import annotations

from collections import Counter

import structlog

from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CategoryCounterService:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def on_product_created(self, category_ids: list[str]) -> None:
        self._adjust(category_ids, +1)

    def on_categories_changed(self, old_ids: list[str], new_ids: list[str]) -> None:
        removed = [c for c in old_ids if c not in new_ids]
        added = [c for c in new_ids if c not in old_ids]
        self._adjust(removed, -1)
        self._adjust(added, +1)

    def on_product_deleted(self, category_ids: list[str]) -> None:
        self._adjust(category_ids, -1)

    def recount(self, product_repo: ProductRepository) -> dict[str, tuple[int, int]]:
        """Recompute every counter; returns ``{slug: (was, now)}`` for drifted ones."""
        actual: Counter[str] = Counter()
        for product in product_repo.list_all():
            if not product.is_deleted:
                actual.update(set(product.categories))

        drifted: dict[str, tuple[int, int]] = {}
        for category in self._category_repo.list_all():
            expected = actual.get(category.id, 0)
            if category.product_count != expected:
                drifted[category.slug] = (category.product_count, expected)
                category.product_count = expected
                self._category_repo.save(category)

        if drifted:
            logger.warning("Category counters drifted", categories=sorted(drifted))
        return drifted

    def _adjust(self, category_ids: list[str], delta: int) -> None:
        for category in self._category_repo.get_many(list(category_ids)):
            category.increment(delta)
            self._category_repo.save(category)
