"""Category aggregate: hierarchical, typed groupings of products."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import ValidationError

DEFAULT_IMAGE = "default-category.jpg"
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50


class CategoryType(Enum):
    PRODUCT = "product"
    DEMOGRAPHIC = "demographic"
    COLLECTION = "collection"

    @staticmethod
    def parse(value: str) -> CategoryType:
        try:
            return CategoryType(value)
        except ValueError:
            allowed = ", ".join(t.value for t in CategoryType)
            raise ValidationError(
                f"Invalid category type '{value}' (expected one of: {allowed})"
            ) from None


def slugify(name: str) -> str:
    """'Women's Shoes' -> 'womens-shoes'."""
    slug = name.lower().replace("'", "")
    slug = re.sub(r"[^a-z0-9]+", "-", slug)
    return slug.strip("-")


@dataclass
class Category:
    """Aggregate root for categories.

    ``product_count`` is a denormalized counter of the non-deleted products
    that reference this category. It is maintained incrementally by the
    CategoryCounterService and can be rebuilt with a recount.
    """

    id: str
    name: str
    slug: str
    type: CategoryType
    description: str | None = None
    image: str = DEFAULT_IMAGE
    parent: str | None = None
    product_count: int = 0
    is_featured: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        id: str,
        name: str,
        type: CategoryType,
        description: str | None = None,
        image: str | None = None,
        parent: str | None = None,
        is_featured: bool = False,
    ) -> Category:
        name = Category._validate_name(name)
        if parent is not None and parent == id:
            raise ValidationError("A category cannot be its own parent")
        return Category(
            id=id,
            name=name,
            slug=slugify(name),
            type=type,
            description=description.strip() if description else None,
            image=image or DEFAULT_IMAGE,
            parent=parent,
            is_featured=is_featured,
        )

    def rename(self, name: str) -> None:
        """Change the name; the slug always follows the name."""
        self.name = self._validate_name(name)
        self.slug = slugify(self.name)

    def reparent(self, parent: str | None) -> None:
        if parent is not None and parent == self.id:
            raise ValidationError("A category cannot be its own parent")
        self.parent = parent

    def increment(self, by: int = 1) -> None:
        """Adjust the counter; a negative *by* decrements."""
        self.product_count += by

    @staticmethod
    def _validate_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("A category must have a name")
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Category name must be at least {MIN_NAME_LENGTH} characters"
            )
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Category name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        if not slugify(name):
            raise ValidationError(f"Category name '{name}' does not produce a valid slug")
        return name
