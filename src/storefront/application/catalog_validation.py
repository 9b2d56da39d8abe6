"""Shared input checks for catalog use cases."""

from __future__ import annotations

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import is_valid_id
from storefront.domain.repository.category_repository import CategoryRepository


def ensure_categories_exist(category_repo: CategoryRepository, category_ids: list[str]) -> None:
    """Reject malformed or unknown category IDs, naming the offenders."""
    invalid = [c for c in category_ids if not is_valid_id(c)]
    if invalid:
        raise ValidationError(f"Invalid category IDs: {', '.join(map(str, invalid))}")

    found = {c.id for c in category_repo.get_many(category_ids)}
    missing = [c for c in category_ids if c not in found]
    if missing:
        raise ValidationError(f"Categories not found: {', '.join(missing)}")
