"""FastAPI routes for the storefront: products, categories, cart and orders.

Every success body is ``{"status": "success", "data": {...}}``; failures are
rendered by the exception handlers registered in ``app.py``.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.create_product import CreateProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import (
    GuestLineSpec,
    ProductChanges,
    ProductPageDTO,
    ProductSpec,
    VariantSpec,
)
from storefront.application.list_products import ListProductsHandler
from storefront.application.manage_category import (
    CreateCategoryHandler,
    DeleteCategoryHandler,
    UpdateCategoryHandler,
)
from storefront.application.recount_categories import RecountCategoriesHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.show_category import (
    CategoryProductsHandler,
    ListCategoriesHandler,
    ShowCategoryHandler,
)
from storefront.application.show_order import (
    ListAllOrdersHandler,
    ListUserOrdersHandler,
    ShowOrderHandler,
)
from storefront.application.show_product import BulkProductsHandler, ShowProductHandler
from storefront.application.sync_cart import SyncCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.application.update_variant import (
    AdjustVariantStockHandler,
    UpdateVariantHandler,
)
from storefront.domain.exceptions import ForbiddenError
from storefront.infrastructure.api.deps import (
    Identity,
    Repositories,
    get_repositories,
    optional_identity,
    require_identity,
)
from storefront.infrastructure.api.schemas import (
    AddToCartRequest,
    AdjustStockRequest,
    BulkProductsRequest,
    CreateCategoryRequest,
    CreateOrderRequest,
    CreateProductRequest,
    SyncCartRequest,
    UpdateCartItemRequest,
    UpdateCategoryRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateVariantRequest,
)


def success(**data: Any) -> dict:
    return {"status": "success", "data": data}


def _page(page: ProductPageDTO) -> dict:
    return {
        "status": "success",
        "results": page.results,
        "total_products": page.total_products,
        "total_pages": page.total_pages,
        "data": {"products": [asdict(p) for p in page.products]},
    }


def _money(value: Any) -> str | None:
    return None if value is None else str(value)


def _sent_as_null(body: BaseModel, name: str) -> bool:
    """True when the client sent an explicit null, which clears the field."""
    return name in body.model_fields_set and getattr(body, name) is None


def _csv(raw: str | None) -> list[str]:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("")
def list_products(
    page: int = Query(default=1),
    limit: int = Query(default=10),
    categories: str | None = Query(default=None, description="Comma-separated IDs or slugs"),
    search: str | None = Query(default=None),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    result = ListProductsHandler(repos.products, repos.categories).handle(
        page=page, limit=limit, categories=_csv(categories), search=search
    )
    return _page(result)


@product_router.post("/bulk")
def bulk_products(
    body: BulkProductsRequest,
    repos: Repositories = Depends(get_repositories),
) -> dict:
    products = BulkProductsHandler(repos.products).handle(body.product_ids)
    return success(products=[asdict(p) for p in products])


@product_router.get("/{product_id}")
def get_product(product_id: str, repos: Repositories = Depends(get_repositories)) -> dict:
    product = ShowProductHandler(repos.products).handle(product_id)
    return success(product=asdict(product))


@product_router.post("", status_code=201)
def create_product(
    body: CreateProductRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    spec = ProductSpec(
        title=body.title,
        description=body.description,
        price=str(body.price),
        discount_price=_money(body.discount_price),
        categories=body.categories,
        sku=body.sku,
        variants=[
            VariantSpec(v.variant_id, v.color, v.size, v.stock) for v in body.variants
        ],
        images=body.images,
        material=body.material,
    )
    product = CreateProductHandler(repos.products, repos.categories).handle(spec)
    return success(product=asdict(product))


@product_router.patch("/{product_id}")
def update_product(
    product_id: str,
    body: UpdateProductRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    changes = ProductChanges(
        title=body.title,
        description=body.description,
        price=_money(body.price),
        discount_price=_money(body.discount_price),
        categories=body.categories,
        sku=body.sku,
        images=body.images,
        material=body.material,
        clear_discount_price=_sent_as_null(body, "discount_price"),
    )
    product = UpdateProductHandler(repos.products, repos.categories).handle(
        product_id, changes
    )
    return success(product=asdict(product))


@product_router.delete("/{product_id}")
def delete_product(
    product_id: str,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    DeleteProductHandler(repos.products, repos.categories).handle(product_id)
    return {"status": "success", "message": "Product deleted successfully"}


@product_router.patch("/{product_id}/variants/{variant_id}")
def update_variant(
    product_id: str,
    variant_id: str,
    body: UpdateVariantRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    product = UpdateVariantHandler(repos.products).handle(
        product_id, variant_id, color=body.color, size=body.size, stock=body.stock
    )
    return success(product=asdict(product))


@product_router.patch("/{product_id}/variants/{variant_id}/stock")
def adjust_variant_stock(
    product_id: str,
    variant_id: str,
    body: AdjustStockRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    product = AdjustVariantStockHandler(repos.products).handle(
        product_id, variant_id, body.quantity_change
    )
    return success(product=asdict(product))


# ---------------------------------------------------------------------------
# Category Router
# ---------------------------------------------------------------------------
category_router = APIRouter(prefix="/categories", tags=["categories"])


@category_router.get("")
def list_categories(
    type: str | None = Query(default=None),
    featured: bool = Query(default=False),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    categories = ListCategoriesHandler(repos.categories).handle(type=type, featured=featured)
    return {
        "status": "success",
        "results": len(categories),
        "data": {"categories": [asdict(c) for c in categories]},
    }


@category_router.post("/recount")
def recount_categories(
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    if identity.role != "admin":
        raise ForbiddenError("You do not have permission to perform this action")
    drift = RecountCategoriesHandler(repos.categories, repos.products).handle()
    return success(
        corrected={slug: {"was": was, "now": now} for slug, (was, now) in drift.items()}
    )


@category_router.get("/{slug}")
def get_category(slug: str, repos: Repositories = Depends(get_repositories)) -> dict:
    category = ShowCategoryHandler(repos.categories).handle(slug)
    return success(category=asdict(category))


@category_router.get("/{slug}/products")
def category_products(
    slug: str,
    page: int = Query(default=1),
    limit: int = Query(default=20),
    sort: str = Query(default=""),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    result = CategoryProductsHandler(repos.categories, repos.products).handle(
        slug, page=page, limit=limit, sort=sort
    )
    return _page(result)


@category_router.post("", status_code=201)
def create_category(
    body: CreateCategoryRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    category = CreateCategoryHandler(repos.categories).handle(
        name=body.name,
        type=body.type,
        description=body.description,
        image=body.image,
        parent=body.parent,
        is_featured=body.is_featured,
    )
    return success(category=asdict(category))


@category_router.patch("/{category_id}")
def update_category(
    category_id: str,
    body: UpdateCategoryRequest,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    category = UpdateCategoryHandler(repos.categories).handle(
        category_id,
        name=body.name,
        type=body.type,
        description=body.description,
        image=body.image,
        parent=body.parent,
        is_featured=body.is_featured,
        clear_parent=_sent_as_null(body, "parent"),
    )
    return success(category=asdict(category))


@category_router.delete("/{category_id}", status_code=204)
def delete_category(
    category_id: str,
    _: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> Response:
    DeleteCategoryHandler(repos.categories, repos.products).handle(category_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("")
def get_cart(
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    cart = ShowCartHandler(repos.carts, repos.products).handle(identity.user_id)
    return success(cart=asdict(cart))


@cart_router.post("")
def add_to_cart(
    body: AddToCartRequest,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    cart = AddToCartHandler(repos.carts, repos.products).handle(
        identity.user_id,
        body.product_id,
        body.quantity,
        body.variant.model_dump() if body.variant else None,
    )
    return success(cart=asdict(cart))


@cart_router.delete("")
def clear_cart(
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    ClearCartHandler(repos.carts).handle(identity.user_id)
    return {"status": "success", "message": "Cart cleared successfully"}


@cart_router.post("/sync")
def sync_cart(
    body: SyncCartRequest,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    items = (body.cart or {}).get("items")
    cart = SyncCartHandler(repos.carts, repos.products).handle(identity.user_id, items)
    return success(cart=asdict(cart))


@cart_router.patch("/items")
def update_cart_item(
    body: UpdateCartItemRequest,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    cart = UpdateCartItemHandler(repos.carts, repos.products).handle(
        identity.user_id, body.item_id, body.quantity
    )
    return success(cart=asdict(cart))


@cart_router.delete("/items/remove")
def remove_from_cart(
    item_id: str | None = Query(default=None),
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    cart = RemoveFromCartHandler(repos.carts, repos.products).handle(
        identity.user_id, item_id
    )
    return success(cart=asdict(cart))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
def create_order(
    body: CreateOrderRequest,
    identity: Identity | None = Depends(optional_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    guest_cart = None
    if body.guest_cart is not None:
        guest_cart = [
            GuestLineSpec(line.product_id, line.variant_id, line.quantity)
            for line in body.guest_cart
        ]
    order = CreateOrderHandler(repos.orders, repos.carts, repos.products).handle(
        identity.user_id if identity else None,
        body.payment_method,
        body.shipping_address.model_dump() if body.shipping_address else None,
        guest_cart,
    )
    return success(order=asdict(order))


@order_router.get("")
def list_my_orders(
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    orders = ListUserOrdersHandler(repos.orders).handle(identity.user_id)
    return {
        "status": "success",
        "results": len(orders),
        "data": {"orders": [asdict(o) for o in orders]},
    }


@order_router.get("/admin")
def list_all_orders(
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    orders = ListAllOrdersHandler(repos.orders).handle(identity.role)
    return {
        "status": "success",
        "results": len(orders),
        "data": {"orders": [asdict(o) for o in orders]},
    }


@order_router.get("/{order_id}")
def get_order(
    order_id: str,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    order = ShowOrderHandler(repos.orders).handle(order_id, identity.user_id)
    return success(order=asdict(order))


@order_router.patch("/{order_id}")
def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    order = UpdateOrderStatusHandler(repos.orders).handle(
        order_id, identity.user_id, body.status
    )
    return success(order=asdict(order))


@order_router.delete("/{order_id}")
def cancel_order(
    order_id: str,
    identity: Identity = Depends(require_identity),
    repos: Repositories = Depends(get_repositories),
) -> dict:
    order = CancelOrderHandler(repos.orders).handle(order_id, identity.user_id)
    return success(order=asdict(order))
