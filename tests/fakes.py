"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects. Aggregates are
copied in and out so a test sees only what was actually saved.
"""

from __future__ import annotations

import copy

from storefront.domain.exceptions import ConcurrencyConflictError
from storefront.domain.model.cart import Cart
from storefront.domain.model.category import Category
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.category_repository import CategoryRepository
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import (
    ProductPage,
    ProductQuery,
    ProductRepository,
)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        self.get_many_calls = 0
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)

    def get_by_id(self, product_id: str) -> Product | None:
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product else None

    def get_many(self, product_ids: list[str]) -> list[Product]:
        self.get_many_calls += 1
        return [copy.deepcopy(self._store[pid]) for pid in product_ids if pid in self._store]

    def get_by_sku(self, sku: str) -> Product | None:
        for p in self._store.values():
            if p.sku == sku:
                return copy.deepcopy(p)
        return None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def search(self, query: ProductQuery) -> ProductPage:
        return query.apply(self.list_all())

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)


class FakeCategoryRepository(CategoryRepository):

    def __init__(self, categories: list[Category] | None = None) -> None:
        self._store: dict[str, Category] = {}
        for c in categories or []:
            self._store[c.id] = copy.deepcopy(c)

    def get_by_id(self, category_id: str) -> Category | None:
        category = self._store.get(category_id)
        return copy.deepcopy(category) if category else None

    def get_by_slug(self, slug: str) -> Category | None:
        for c in self._store.values():
            if c.slug == slug:
                return copy.deepcopy(c)
        return None

    def get_many(self, category_ids: list[str]) -> list[Category]:
        return [copy.deepcopy(self._store[cid]) for cid in category_ids if cid in self._store]

    def list_all(self) -> list[Category]:
        return [copy.deepcopy(c) for c in self._store.values()]

    def save(self, category: Category) -> None:
        self._store[category.id] = copy.deepcopy(category)

    def delete(self, category_id: str) -> bool:
        return self._store.pop(category_id, None) is not None


class FakeCartRepository(CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        self._store: dict[str, Cart] = {}
        self.save_calls = 0
        for c in carts or []:
            self._store[c.user_id] = copy.deepcopy(c)

    def get_by_user(self, user_id: str) -> Cart | None:
        cart = self._store.get(user_id)
        return copy.deepcopy(cart) if cart else None

    def save(self, cart: Cart) -> None:
        stored = self._store.get(cart.user_id)
        expected = stored.version if stored else 0
        if cart.version != expected:
            raise ConcurrencyConflictError("Cart was modified concurrently, please retry")
        cart.version += 1
        self._store[cart.user_id] = copy.deepcopy(cart)
        self.save_calls += 1

    def delete(self, user_id: str) -> bool:
        return self._store.pop(user_id, None) is not None


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for o in orders or []:
            self._store[o.id] = copy.deepcopy(o)

    def get_by_id(self, order_id: str) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order else None

    def list_by_user(self, user_id: str) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values() if o.user_id == user_id]

    def list_all(self) -> list[Order]:
        return [copy.deepcopy(o) for o in self._store.values()]

    def save(self, order: Order) -> None:
        self._store[order.id] = copy.deepcopy(order)
