"""Application services: single and bulk product lookups (queries)."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import ensure_valid_id, is_valid_id
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class ShowProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str) -> ProductDTO:
        ensure_valid_id(product_id, "product")
        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError("No product found with that ID")
        return product_to_dto(product)


class BulkProductsHandler:
    """Fetch several products at once, e.g. to render a client-side cart."""

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_ids: list[str]) -> list[ProductDTO]:
        if not isinstance(product_ids, list) or not product_ids:
            raise ValidationError("Please provide an array of product IDs")

        invalid = [pid for pid in product_ids if not is_valid_id(pid)]
        if invalid:
            raise ValidationError(f"Invalid product IDs: {', '.join(map(str, invalid))}")

        products = [p for p in self._product_repo.get_many(product_ids) if not p.is_deleted]

        if len(products) < len(set(product_ids)):
            found = {p.id for p in products}
            missing = [pid for pid in product_ids if pid not in found]
            logger.warning("Some products not found", missing_ids=missing)

        return [product_to_dto(p) for p in products]
