"""Pydantic request schemas for the HTTP API.

These are external contracts, kept separate from the application DTOs.
Fields whose absence is a business error (reported with a domain message)
are optional here so the use case, not the parser, decides.
"""

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class VariantSchema(BaseModel):
    variant_id: str
    color: str
    size: str
    stock: int = Field(ge=0, default=0)


class CreateProductRequest(BaseModel):
    title: str
    description: str
    price: Decimal = Field(ge=0)
    discount_price: Decimal | None = Field(ge=0, default=None)
    categories: list[str] = []
    sku: str
    variants: list[VariantSchema] = []
    images: list[str] = []
    material: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Linen Shirt",
                    "description": "Relaxed fit, breathable linen.",
                    "price": 49.0,
                    "discount_price": 39.0,
                    "categories": ["6f1c2d3e4b5a69788796a5b4c3d2e1f0"],
                    "sku": "LS-001",
                    "variants": [
                        {"variant_id": "LS-001-M-W", "color": "white", "size": "M", "stock": 12}
                    ],
                    "images": ["linen-shirt.jpg"],
                    "material": "linen",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    price: Decimal | None = Field(ge=0, default=None)
    discount_price: Decimal | None = Field(ge=0, default=None)
    categories: list[str] | None = None
    sku: str | None = None
    images: list[str] | None = None
    material: str | None = None


class BulkProductsRequest(BaseModel):
    product_ids: Any = None


class UpdateVariantRequest(BaseModel):
    color: str | None = None
    size: str | None = None
    stock: int | None = None


class AdjustStockRequest(BaseModel):
    quantity_change: Any = None


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------
class CreateCategoryRequest(BaseModel):
    name: str
    type: str
    description: str | None = None
    image: str | None = None
    parent: str | None = None
    is_featured: bool = False


class UpdateCategoryRequest(BaseModel):
    name: str | None = None
    type: str | None = None
    description: str | None = None
    image: str | None = None
    parent: str | None = None
    is_featured: bool | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartVariantSchema(BaseModel):
    variant_id: str | None = None
    size: str | None = None
    color: str | None = None


class AddToCartRequest(BaseModel):
    product_id: str | None = None
    quantity: int | None = None
    variant: CartVariantSchema | None = None


class SyncCartRequest(BaseModel):
    """``{"cart": {"items": [...]}}``; malformed lines are skipped, not rejected."""

    cart: dict[str, Any] | None = None


class UpdateCartItemRequest(BaseModel):
    item_id: str | None = None
    quantity: int | None = None


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None


class GuestCartLineSchema(BaseModel):
    product_id: str
    variant_id: str
    quantity: int


class CreateOrderRequest(BaseModel):
    payment_method: str | None = None
    shipping_address: AddressSchema | None = None
    guest_cart: list[GuestCartLineSchema] | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: str | None = None
