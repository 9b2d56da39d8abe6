"""Application service: List Products use case (query).

Supports paging, an AND-filter over categories (given as IDs or slugs)
and a free-text search that matches the title or a category name.
"""

from __future__ import annotations

from storefront.application.dto import ProductPageDTO, page_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import is_valid_id
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import (
    ProductQuery,
    ProductRepository,
)

DEFAULT_LIMIT = 10


class ListProductsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        page: int = 1,
        limit: int = DEFAULT_LIMIT,
        categories: list[str] | None = None,
        search: str | None = None,
    ) -> ProductPageDTO:
        if page < 1 or limit < 1:
            raise ValidationError("Page and limit must be positive")

        category_ids = self._resolve_categories(categories or [])

        search_categories: tuple[str, ...] = ()
        if search:
            term = search.lower()
            search_categories = tuple(
                c.id for c in self._category_repo.list_all() if term in c.name.lower()
            )

        query = ProductQuery(
            all_categories=tuple(category_ids),
            title_search=search or None,
            search_categories=search_categories,
            page=page,
            limit=limit,
        )
        return page_to_dto(self._product_repo.search(query))

    def _resolve_categories(self, raw: list[str]) -> list[str]:
        """Turn a mix of category IDs and slugs into IDs; all must exist."""
        ids: list[str] = []
        for value in raw:
            if is_valid_id(value):
                category = self._category_repo.get_by_id(value)
            else:
                category = self._category_repo.get_by_slug(value)
            if category is None:
                raise ValidationError("One or more categories not found")
            ids.append(category.id)
        return ids
