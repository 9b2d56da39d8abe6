"""Application service: Delete Product use case (soft delete)."""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import ensure_valid_id
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.category_counter_service import CategoryCounterService

logger = structlog.get_logger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, product_id: str) -> None:
        """Mark a product deleted; it stays on disk for past orders."""
        ensure_valid_id(product_id, "product")

        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError("No product found with that ID")

        product.soft_delete()
        self._product_repo.save(product)
        CategoryCounterService(self._category_repo).on_product_deleted(product.categories)

        logger.info("Product soft-deleted", product_id=product_id)
