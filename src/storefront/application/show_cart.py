"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO, cart_to_dto
from storefront.domain.model.cart import Cart
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


def populated_cart_dto(cart: Cart, product_repo: ProductRepository) -> CartDTO:
    """Map a cart with each line's product title and unit price filled in."""
    ids = list(dict.fromkeys(item.product_id for item in cart.items))
    products = {p.id: p for p in product_repo.get_many(ids)} if ids else {}
    return cart_to_dto(cart, products)


class ShowCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str) -> CartDTO:
        """Return the user's cart, or an empty one without storing it."""
        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            return CartDTO(user_id=user_id)
        return populated_cart_dto(cart, self._product_repo)
