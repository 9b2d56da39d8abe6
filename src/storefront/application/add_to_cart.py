"""Application service: Add To Cart use case.

Direct adds are strict, unlike sync: every field is required, the variant
must match exactly and the *summed* quantity must fit in live stock.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import CartDTO
from storefront.application.show_cart import populated_cart_dto
from storefront.domain.exceptions import EntityNotFoundError, MissingFieldError
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import VariantDescriptor, ensure_valid_id
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.variant_matcher import match_variant

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def handle(
        self,
        user_id: str,
        product_id: str | None,
        quantity: int | None,
        variant: dict | None,
    ) -> CartDTO:
        descriptor = VariantDescriptor.from_raw(variant)
        if not product_id or not quantity or descriptor is None:
            raise MissingFieldError("Product ID, quantity, and variant are required")
        ensure_valid_id(product_id, "product")

        product = self._product_repo.get_by_id(product_id)
        if product is None or product.is_deleted:
            raise EntityNotFoundError("Product not found")

        matched = match_variant(product, descriptor)
        if matched is None:
            raise EntityNotFoundError("Variant not found or mismatch")

        cart = self._cart_repo.get_by_user(user_id) or Cart(user_id=user_id)
        cart.add_item(product.id, matched, quantity, product.unit_price)
        self._cart_repo.save(cart)

        logger.info(
            "Added to cart",
            user_id=user_id,
            product_id=product.id,
            variant_id=matched.variant_id,
            quantity=quantity,
        )
        return populated_cart_dto(cart, self._product_repo)
