"""Application services: create, update and delete categories."""

from __future__ import annotations

import structlog

from storefront.application.dto import CategoryDTO, category_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.category import Category, CategoryType
from storefront.domain.model.value_objects import ensure_valid_id, new_id
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


def _ensure_parent_exists(repo: CategoryRepository, parent: str | None) -> None:
    if parent is None:
        return
    ensure_valid_id(parent, "parent category")
    if repo.get_by_id(parent) is None:
        raise ValidationError("Parent category does not exist")


def _ensure_slug_free(repo: CategoryRepository, slug: str, owner_id: str) -> None:
    existing = repo.get_by_slug(slug)
    if existing is not None and existing.id != owner_id:
        raise ValidationError(f"A category with slug '{slug}' already exists")


class CreateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        name: str,
        type: str,
        description: str | None = None,
        image: str | None = None,
        parent: str | None = None,
        is_featured: bool = False,
    ) -> CategoryDTO:
        _ensure_parent_exists(self._category_repo, parent)

        category = Category.create(
            id=new_id(),
            name=name,
            type=CategoryType.parse(type),
            description=description,
            image=image,
            parent=parent,
            is_featured=is_featured,
        )
        _ensure_slug_free(self._category_repo, category.slug, category.id)

        self._category_repo.save(category)
        logger.info("Category created", category_id=category.id, slug=category.slug)
        return category_to_dto(category)


class UpdateCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(
        self,
        category_id: str,
        name: str | None = None,
        type: str | None = None,
        description: str | None = None,
        image: str | None = None,
        parent: str | None = None,
        is_featured: bool | None = None,
        clear_parent: bool = False,
    ) -> CategoryDTO:
        """Partially update a category; renaming regenerates the slug."""
        ensure_valid_id(category_id, "category")
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError("No category found with that ID")

        if name is not None:
            category.rename(name)
            _ensure_slug_free(self._category_repo, category.slug, category.id)
        if type is not None:
            category.type = CategoryType.parse(type)
        if description is not None:
            category.description = description.strip() or None
        if image is not None:
            category.image = image
        if clear_parent:
            category.reparent(None)
        elif parent is not None:
            _ensure_parent_exists(self._category_repo, parent)
            category.reparent(parent)
        if is_featured is not None:
            category.is_featured = is_featured

        self._category_repo.save(category)
        return category_to_dto(category)


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, category_id: str) -> None:
        """Delete a category and pull it from every product that lists it.

        Other categories' counters are not touched.
        """
        ensure_valid_id(category_id, "category")
        if not self._category_repo.delete(category_id):
            raise EntityNotFoundError("No category found with that ID")

        detached = 0
        for product in self._product_repo.list_all():
            if product.remove_category(category_id):
                self._product_repo.save(product)
                detached += 1

        logger.info("Category deleted", category_id=category_id, products_detached=detached)
