"""Application service: Update Cart Item use case."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.show_cart import populated_cart_dto
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.model.value_objects import ensure_valid_id
from storefront.domain.repository.product_repository import ProductRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(self, user_id: str, item_id: str | None, quantity: int | None) -> CartDTO:
        """Set a line's quantity (absolute, not additive), bounded by live stock."""
        if (
            not item_id
            or not isinstance(quantity, int)
            or isinstance(quantity, bool)
            or quantity < 1
        ):
            raise ValidationError("Valid item ID and quantity are required")
        ensure_valid_id(item_id, "cart item")

        cart = self._cart_repo.get_by_user(user_id)
        if cart is None:
            raise EntityNotFoundError("Cart not found")

        item = cart.find_item(item_id)
        if item is None:
            raise EntityNotFoundError("Item not found in cart")

        product = self._product_repo.get_by_id(item.product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError("Product not found")

        variant = product.find_variant(item.variant.variant_id)
        if variant is None:
            raise EntityNotFoundError("Variant not found")

        cart.set_quantity(item_id, quantity, variant)
        self._cart_repo.save(cart)
        return populated_cart_dto(cart, self._product_repo)
