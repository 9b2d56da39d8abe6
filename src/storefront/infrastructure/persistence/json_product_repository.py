"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product, Variant
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_many(self, product_ids: list[str]) -> list[Product]:
        wanted = set(product_ids)
        return [self._to_domain(raw) for raw in self._file.load() if raw["id"] in wanted]

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._file.load():
            if raw["sku"] == sku:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    def search(self, query: ProductQuery) -> ProductPage:
        return query.apply(self.list_all())

    def save(self, product: Product) -> None:
        self._file.upsert(self._to_raw(product), key="id")

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "title": product.title,
            "description": product.description,
            "price": str(product.price.amount),
            "discount_price": (
                str(product.discount_price.amount) if product.discount_price else None
            ),
            "currency": product.price.currency,
            "categories": list(product.categories),
            "sku": product.sku,
            "variants": [
                {
                    "variant_id": v.variant_id,
                    "color": v.color,
                    "size": v.size,
                    "stock": v.stock,
                }
                for v in product.variants
            ],
            "images": list(product.images),
            "material": product.material,
            "is_deleted": product.is_deleted,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        discount = raw.get("discount_price")
        return Product(
            id=raw["id"],
            title=raw["title"],
            description=raw["description"],
            price=Money(Decimal(raw["price"]), currency),
            discount_price=Money(Decimal(discount), currency) if discount else None,
            categories=list(raw.get("categories", [])),
            sku=raw["sku"],
            variants=[
                Variant(
                    variant_id=v["variant_id"],
                    color=v["color"],
                    size=v["size"],
                    stock=v.get("stock", 0),
                )
                for v in raw.get("variants", [])
            ],
            images=list(raw.get("images", [])),
            material=raw.get("material"),
            is_deleted=raw.get("is_deleted", False),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
