"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.catalog_validation import ensure_categories_exist
from storefront.application.dto import ProductChanges, ProductDTO, product_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money, ensure_valid_id
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.category_counter_service import CategoryCounterService


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(self, product_id: str, changes: ProductChanges) -> ProductDTO:
        """Apply a partial update to a product.

        This does NOT affect any existing orders; they captured a
        snapshot of the product at creation time. When the category list
        changes, counters move only for the categories added or removed.
        """
        ensure_valid_id(product_id, "product")

        if changes.categories is not None:
            if not changes.categories:
                raise ValidationError("Categories must be a non-empty array")
            ensure_categories_exist(self._category_repo, changes.categories)

        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError("No product found with that ID")

        if changes.sku is not None:
            other = self._product_repo.get_by_sku(changes.sku.strip())
            if other is not None and other.id != product.id:
                raise ValidationError(f"A product with SKU '{changes.sku}' already exists")

        product.update_details(
            title=changes.title,
            description=changes.description,
            price=Money.of(changes.price) if changes.price is not None else None,
            discount_price=(
                Money.of(changes.discount_price)
                if changes.discount_price is not None
                else None
            ),
            sku=changes.sku,
            images=changes.images,
            material=changes.material,
            clear_discount_price=changes.clear_discount_price,
        )

        old_categories = list(product.categories)
        if changes.categories is not None:
            product.assign_categories(changes.categories)

        self._product_repo.save(product)

        if changes.categories is not None:
            CategoryCounterService(self._category_repo).on_categories_changed(
                old_categories, product.categories
            )
        return product_to_dto(product)
