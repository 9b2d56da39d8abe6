"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from storefront.domain.model.category import DEFAULT_IMAGE, Category, CategoryType
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CategoryRepository interface -----------------------------------------

    def get_by_id(self, category_id: str) -> Category | None:
        return self._find("id", category_id)

    def get_by_slug(self, slug: str) -> Category | None:
        return self._find("slug", slug)

    def get_many(self, category_ids: list[str]) -> list[Category]:
        wanted = set(category_ids)
        return [self._to_domain(raw) for raw in self._file.load() if raw["id"] in wanted]

    def list_all(self) -> list[Category]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def save(self, category: Category) -> None:
        self._file.upsert(self._to_raw(category), key="id")

    def delete(self, category_id: str) -> bool:
        return self._file.remove("id", category_id)

    def _find(self, key: str, value: str) -> Category | None:
        for raw in self._file.load():
            if raw[key] == value:
                return self._to_domain(raw)
        return None

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {
            "id": category.id,
            "name": category.name,
            "slug": category.slug,
            "type": category.type.value,
            "description": category.description,
            "image": category.image,
            "parent": category.parent,
            "product_count": category.product_count,
            "is_featured": category.is_featured,
            "created_at": category.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            slug=raw["slug"],
            type=CategoryType(raw["type"]),
            description=raw.get("description"),
            image=raw.get("image") or DEFAULT_IMAGE,
            parent=raw.get("parent"),
            product_count=raw.get("product_count", 0),
            is_featured=raw.get("is_featured", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
