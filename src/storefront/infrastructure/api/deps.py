"""FastAPI dependencies: caller identity and repositories.

Identity is established upstream by the authentication provider, which
forwards the verified user as ``X-User-Id`` / ``X-User-Role`` headers.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException

from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure import bootstrap


@dataclass(frozen=True)
class Identity:
    user_id: str
    role: str = "user"


@dataclass(frozen=True)
class Repositories:
    products: ProductRepository
    categories: CategoryRepository
    carts: CartRepository
    orders: OrderRepository


def get_repositories() -> Repositories:
    return Repositories(
        products=bootstrap.product_repository(),
        categories=bootstrap.category_repository(),
        carts=bootstrap.cart_repository(),
        orders=bootstrap.order_repository(),
    )


def optional_identity(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity | None:
    if not x_user_id:
        return None
    return Identity(user_id=x_user_id, role=x_user_role or "user")


def require_identity(identity: Identity | None = Depends(optional_identity)) -> Identity:
    if identity is None:
        raise HTTPException(status_code=401, detail="You are not logged in")
    return identity
