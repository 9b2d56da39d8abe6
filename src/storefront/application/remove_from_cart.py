"""Application service: Remove From Cart use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.show_cart import populated_cart_dto
from storefront.domain.exceptions import EntityNotFoundError, MissingFieldError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository


class RemoveFromCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, item_id: str | None) -> CartDTO:
        if not item_id:
            raise MissingFieldError("Item ID is required")

        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        cart.remove_item(item_id)
        self._cart_repo.save(cart)
        return populated_cart_dto(cart, self._product_repo)
