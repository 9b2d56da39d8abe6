"""Application services: variant upsert and stock adjustment."""

from __future__ import annotations

import structlog

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import ensure_valid_id
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


def _load_live_product(repo: ProductRepository, product_id: str) -> Product:
    ensure_valid_id(product_id, "product")
    product = repo.get_by_id(product_id)
    if product is None or product.is_deleted:
        raise EntityNotFoundError("No product found with that ID")
    return product


class UpdateVariantHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_id: str,
        variant_id: str,
        color: str | None = None,
        size: str | None = None,
        stock: int | None = None,
    ) -> ProductDTO:
        """Update the variant if the product has it, otherwise add it."""
        product = _load_live_product(self._product_repo, product_id)
        product.upsert_variant(variant_id, color=color, size=size, stock=stock)
        self._product_repo.save(product)
        return product_to_dto(product)


class AdjustVariantStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, variant_id: str, quantity_change: int) -> ProductDTO:
        """Add (positive) or remove (negative) units of stock.

        A change that would take stock below zero is rejected and nothing
        is saved.
        """
        if (
            not isinstance(quantity_change, int)
            or isinstance(quantity_change, bool)
            or quantity_change == 0
        ):
            raise ValidationError("Quantity change must be a non-zero integer")

        product = _load_live_product(self._product_repo, product_id)
        variant = product.adjust_stock(variant_id, quantity_change)
        self._product_repo.save(product)

        logger.info(
            "Variant stock adjusted",
            product_id=product_id,
            variant_id=variant_id,
            change=quantity_change,
            stock=variant.stock,
        )
        return product_to_dto(product)
