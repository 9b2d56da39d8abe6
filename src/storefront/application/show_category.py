"""Application services: browse categories and their products (queries)."""

from __future__ import annotations

from storefront.application.dto import (
    CategoryDTO,
    ProductPageDTO,
    category_to_dto,
    page_to_dto,
)
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.category import Category, CategoryType
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import (
    ProductQuery,
    ProductRepository,
)

SORTABLE_FIELDS = frozenset({"title", "price", "discount_price", "sku", "created_at"})


class ListCategoriesHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, type: str | None = None, featured: bool = False) -> list[CategoryDTO]:
        wanted = CategoryType.parse(type) if type else None
        return [
            category_to_dto(c)
            for c in self._category_repo.list_all()
            if (wanted is None or c.type == wanted) and (not featured or c.is_featured)
        ]


class ShowCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, slug: str) -> CategoryDTO:
        return category_to_dto(_load_by_slug(self._category_repo, slug))


class CategoryProductsHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(
        self,
        slug: str,
        page: int = 1,
        limit: int = 20,
        sort: str = "",
    ) -> ProductPageDTO:
        """List a category's products; *sort* is a field name, ``-`` for descending."""
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")
        if sort and sort.lstrip("-") not in SORTABLE_FIELDS:
            raise ValidationError(f"Cannot sort by '{sort}'")

        category = _load_by_slug(self._category_repo, slug)
        query = ProductQuery(
            all_categories=(category.id,), sort=sort, page=page, limit=limit
        )
        return page_to_dto(self._product_repo.search(query))


def _load_by_slug(repo: CategoryRepository, slug: str) -> Category:
    category = repo.get_by_slug(slug)
    if category is None:
        raise EntityNotFoundError("No category found with that slug")
    return category
