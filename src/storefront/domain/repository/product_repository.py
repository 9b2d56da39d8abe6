"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from storefront.domain.model.product import Product


@dataclass(frozen=True)
class ProductQuery:
    """Filter, sort and page over non-deleted products.

    ``all_categories``: a product must reference every one of these.
    ``title_search`` / ``search_categories``: a product matches when its
    title contains the term (case-insensitive) or it belongs to any of the
    search categories.
    """

    all_categories: tuple[str, ...] = ()
    title_search: str | None = None
    search_categories: tuple[str, ...] = ()
    sort: str = ""
    page: int = 1
    limit: int = 10

    def matches(self, product: Product) -> bool:
        if product.is_deleted:
            return False
        if any(c not in product.categories for c in self.all_categories):
            return False
        if self.title_search:
            in_title = self.title_search.lower() in product.title.lower()
            in_category = any(c in product.categories for c in self.search_categories)
            if not (in_title or in_category):
                return False
        return True

    def apply(self, products: list[Product]) -> ProductPage:
        """Filter, sort and slice an in-memory product list."""
        matched = [p for p in products if self.matches(p)]
        if self.sort:
            key = self.sort.lstrip("-")
            matched.sort(
                key=lambda p: _sort_value(p, key), reverse=self.sort.startswith("-")
            )
        start = (self.page - 1) * self.limit
        return ProductPage(
            products=matched[start:start + self.limit],
            total=len(matched),
            limit=self.limit,
        )


def _sort_value(product: Product, key: str):
    if key in ("price", "discount_price"):
        money = getattr(product, key)
        return money.amount if money is not None else 0
    return getattr(product, key, "")


@dataclass(frozen=True)
class ProductPage:
    products: list[Product] = field(default_factory=list)
    total: int = 0
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID (deleted or not), or None."""

    @abstractmethod
    def get_many(self, product_ids: list[str]) -> list[Product]:
        """Return the products matching the given IDs, in one batch."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> Product | None:
        """Return the product carrying this SKU, or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product, soft-deleted ones included."""

    @abstractmethod
    def search(self, query: ProductQuery) -> ProductPage:
        """Return one page of non-deleted products matching *query*."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
