"""Application service: Create Product use case."""

from __future__ import annotations

import structlog

from storefront.application.catalog_validation import ensure_categories_exist
from storefront.application.dto import ProductDTO, ProductSpec, product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money, new_id
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.category_counter_service import CategoryCounterService

logger = structlog.get_logger(__name__)


class CreateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, spec: ProductSpec) -> ProductDTO:
        """Add a new product to the catalog.

        Every referenced category must exist; each of them gains one to
        its product count once the product is stored.
        """
        if not spec.categories:
            raise ValidationError("A product must belong to at least one category")
        if not spec.variants:
            raise ValidationError("A product must have at least one variant")
        ensure_categories_exist(self._category_repo, spec.categories)

        if self._product_repo.get_by_sku(spec.sku.strip()) is not None:
            raise ValidationError(f"A product with SKU '{spec.sku}' already exists")

        product = Product.create(
            id=new_id(),
            title=spec.title,
            description=spec.description,
            price=Money.of(spec.price),
            discount_price=(
                Money.of(spec.discount_price) if spec.discount_price is not None else None
            ),
            categories=spec.categories,
            sku=spec.sku,
            variants=[
                Variant(variant_id=v.variant_id, color=v.color, size=v.size, stock=v.stock)
                for v in spec.variants
            ],
            images=spec.images,
            material=spec.material,
        )
        self._product_repo.save(product)
        CategoryCounterService(self._category_repo).on_product_created(product.categories)

        logger.info("Product created", product_id=product.id, sku=product.sku)
        return product_to_dto(product)
