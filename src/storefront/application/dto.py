"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/HTTP layers and the application layer
without exposing domain internals to the outside world. Money is rendered as
a plain decimal string (``"15.00"``) so it survives JSON without rounding.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.cart import Cart
from storefront.domain.model.category import Category
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductPage

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VariantSpec:
    variant_id: str
    color: str
    size: str
    stock: int = 0


@dataclass(frozen=True)
class ProductSpec:
    """Input: everything needed to create a product."""

    title: str
    description: str
    price: str
    categories: list[str]
    sku: str
    variants: list[VariantSpec]
    images: list[str]
    discount_price: str | None = None
    material: str | None = None


@dataclass(frozen=True)
class ProductChanges:
    """Input: a partial product update; None means "leave as is"."""

    title: str | None = None
    description: str | None = None
    price: str | None = None
    discount_price: str | None = None
    categories: list[str] | None = None
    sku: str | None = None
    images: list[str] | None = None
    material: str | None = None
    clear_discount_price: bool = False


@dataclass(frozen=True)
class GuestLineSpec:
    """Input: one guest checkout line."""

    product_id: str
    variant_id: str
    quantity: int


# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class VariantDTO:
    variant_id: str
    color: str
    size: str
    stock: int


@dataclass(frozen=True)
class ProductDTO:
    id: str
    title: str
    description: str
    price: str
    discount_price: str | None
    categories: list[str]
    sku: str
    variants: list[VariantDTO]
    images: list[str]
    material: str | None


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductDTO]
    results: int
    total_products: int
    total_pages: int


@dataclass(frozen=True)
class CategoryDTO:
    id: str
    name: str
    slug: str
    type: str
    description: str | None
    image: str
    parent: str | None
    product_count: int
    is_featured: bool


@dataclass(frozen=True)
class CartItemDTO:
    id: str
    product_id: str
    quantity: int
    variant: dict
    title: str | None = None
    unit_price: str | None = None


@dataclass(frozen=True)
class CartDTO:
    user_id: str
    items: list[CartItemDTO] = field(default_factory=list)
    total_amount: str = "0.00"


@dataclass(frozen=True)
class OrderLineDTO:
    product_id: str
    title: str
    description: str
    size: str
    color: str
    quantity: int
    price: str
    line_total: str
    images: list[str]


@dataclass(frozen=True)
class OrderDTO:
    id: str
    user_id: str | None
    status: str
    payment_method: str
    shipping_address: dict
    lines: list[OrderLineDTO]
    total_amount: str
    created_at: str


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        title=product.title,
        description=product.description,
        price=product.price.plain,
        discount_price=product.discount_price.plain if product.discount_price else None,
        categories=list(product.categories),
        sku=product.sku,
        variants=[
            VariantDTO(v.variant_id, v.color, v.size, v.stock) for v in product.variants
        ],
        images=list(product.images),
        material=product.material,
    )


def page_to_dto(page: ProductPage) -> ProductPageDTO:
    return ProductPageDTO(
        products=[product_to_dto(p) for p in page.products],
        results=len(page.products),
        total_products=page.total,
        total_pages=page.total_pages,
    )


def category_to_dto(category: Category) -> CategoryDTO:
    return CategoryDTO(
        id=category.id,
        name=category.name,
        slug=category.slug,
        type=category.type.value,
        description=category.description,
        image=category.image,
        parent=category.parent,
        product_count=category.product_count,
        is_featured=category.is_featured,
    )


def cart_to_dto(cart: Cart, products: dict[str, Product] | None = None) -> CartDTO:
    """Map a cart, populating product title and unit price where known."""
    products = products or {}
    items = []
    for item in cart.items:
        product = products.get(item.product_id)
        items.append(
            CartItemDTO(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity,
                variant=item.variant.to_raw(),
                title=product.title if product else None,
                unit_price=product.unit_price.plain if product else None,
            )
        )
    return CartDTO(user_id=cart.user_id, items=items, total_amount=cart.total_amount.plain)


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        user_id=order.user_id,
        status=order.status.value,
        payment_method=order.payment_method.value,
        shipping_address=order.shipping_address.to_raw(),
        lines=[
            OrderLineDTO(
                product_id=line.product_id,
                title=line.title,
                description=line.description,
                size=line.size,
                color=line.color,
                quantity=line.quantity.value,
                price=line.price.plain,
                line_total=line.line_total.plain,
                images=list(line.images),
            )
            for line in order.lines
        ],
        total_amount=order.total_amount.plain,
        created_at=order.created_at.isoformat(),
    )
