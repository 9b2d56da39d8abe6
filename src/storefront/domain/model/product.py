"""Product aggregate and its embedded variants.

Products live independently of carts and orders. They have their own
lifecycle: prices change, variants gain and lose stock, and products are
soft-deleted (never physically removed) so past orders keep their references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from storefront.domain.model.value_objects import Money, VariantDescriptor

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 1000


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Variant:
    """A size/color combination of a product with its own stock count.

    Invariant: ``stock`` is never negative.
    """

    variant_id: str
    color: str
    size: str
    stock: int = 0

    def matches(self, descriptor: VariantDescriptor) -> bool:
        return (
            self.variant_id == descriptor.variant_id
            and self.size == descriptor.size
            and self.color == descriptor.color
        )

    def can_cover(self, quantity: int) -> bool:
        return self.stock >= quantity

    def adjust_stock(self, change: int) -> None:
        if self.stock + change < 0:
            raise InsufficientStockError(
                f"Insufficient stock for variant '{self.variant_id}' "
                f"(have {self.stock}, change {change})"
            )
        self.stock += change

    def descriptor(self) -> VariantDescriptor:
        return VariantDescriptor(self.variant_id, self.size, self.color)


@dataclass
class Product:
    """Aggregate root for catalog products.

    Use ``Product.create()`` for new products; it enforces every invariant.
    ``__init__`` stays simple so repositories can reconstitute persisted
    products without re-validating.
    """

    id: str
    title: str
    description: str
    price: Money
    categories: list[str]
    sku: str
    variants: list[Variant]
    images: list[str]
    discount_price: Money | None = None
    material: str | None = None
    is_deleted: bool = False
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        id: str,
        title: str,
        description: str,
        price: Money,
        categories: list[str],
        sku: str,
        variants: list[Variant],
        images: list[str],
        discount_price: Money | None = None,
        material: str | None = None,
    ) -> Product:
        product = Product(
            id=id,
            title=(title or "").strip(),
            description=(description or "").strip(),
            price=price,
            categories=list(dict.fromkeys(categories or [])),
            sku=(sku or "").strip(),
            variants=list(variants or []),
            images=list(images or []),
            discount_price=discount_price,
            material=material.strip() if material else None,
        )
        product._validate()
        return product

    # --- Pricing --------------------------------------------------------------

    @property
    def unit_price(self) -> Money:
        """The price a buyer pays: the discount price when one is set."""
        return self.discount_price if self.discount_price is not None else self.price

    # --- Mutations ------------------------------------------------------------

    def update_details(
        self,
        title: str | None = None,
        description: str | None = None,
        price: Money | None = None,
        discount_price: Money | None = None,
        sku: str | None = None,
        images: list[str] | None = None,
        material: str | None = None,
        clear_discount_price: bool = False,
    ) -> None:
        """Apply a partial update, then re-check the details it can touch.

        Categories and variants are left alone here, so a product whose
        last category was deleted can still be edited.
        """
        if title is not None:
            self.title = title.strip()
        if description is not None:
            self.description = description.strip()
        if price is not None:
            self.price = price
        if clear_discount_price:
            self.discount_price = None
        elif discount_price is not None:
            self.discount_price = discount_price
        if sku is not None:
            self.sku = sku.strip()
        if images is not None:
            self.images = list(images)
        if material is not None:
            self.material = material.strip()
        self._validate_details()
        self.touch()

    def assign_categories(self, category_ids: list[str]) -> None:
        if not category_ids:
            raise ValidationError("Categories must be a non-empty array")
        self.categories = list(dict.fromkeys(category_ids))
        self.touch()

    def remove_category(self, category_id: str) -> bool:
        """Pull a category reference; returns True if one was removed."""
        if category_id not in self.categories:
            return False
        self.categories = [c for c in self.categories if c != category_id]
        self.touch()
        return True

    def find_variant(self, variant_id: str) -> Variant | None:
        for variant in self.variants:
            if variant.variant_id == variant_id:
                return variant
        return None

    def upsert_variant(
        self,
        variant_id: str,
        color: str | None = None,
        size: str | None = None,
        stock: int | None = None,
    ) -> Variant:
        """Update the named variant in place, or add it if it is new."""
        if stock is not None and (not isinstance(stock, int) or stock < 0):
            raise ValidationError("Stock cannot be negative")

        variant = self.find_variant(variant_id)
        if variant is not None:
            if color:
                variant.color = color
            if size:
                variant.size = size
            if stock is not None:
                variant.stock = stock
        else:
            if not color or not size:
                raise ValidationError("A new variant must have a color and a size")
            variant = Variant(variant_id=variant_id, color=color, size=size, stock=stock or 0)
            self.variants.append(variant)
        self.touch()
        return variant

    def adjust_stock(self, variant_id: str, quantity_change: int) -> Variant:
        variant = self.find_variant(variant_id)
        if variant is None:
            raise EntityNotFoundError("Variant not found")
        variant.adjust_stock(quantity_change)
        self.touch()
        return variant

    def soft_delete(self) -> None:
        self.is_deleted = True
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()

    # --- Invariants -----------------------------------------------------------

    def _validate(self) -> None:
        self._validate_details()
        if not self.categories:
            raise ValidationError("A product must belong to at least one category")
        if not self.variants:
            raise ValidationError("A product must have at least one variant")

        seen: set[str] = set()
        for variant in self.variants:
            if variant.variant_id in seen:
                raise ValidationError(f"Duplicate variant ID '{variant.variant_id}'")
            seen.add(variant.variant_id)
            if variant.stock < 0:
                raise ValidationError("Stock cannot be negative")

    def _validate_details(self) -> None:
        if not self.title:
            raise ValidationError("A product must have a title")
        if len(self.title) > MAX_TITLE_LENGTH:
            raise ValidationError(f"Title must be {MAX_TITLE_LENGTH} characters or less")
        if not self.description:
            raise ValidationError("A product must have a description")
        if len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less"
            )
        if self.discount_price is not None and self.discount_price >= self.price:
            raise ValidationError(
                "Discount price must be below the regular price and non-negative"
            )
        if not self.sku:
            raise ValidationError("A product must have a SKU")
        if not self.images:
            raise ValidationError("A product must have at least one image")
