"""JSON-file-backed implementation of CartRepository.

Saves are guarded by the cart's ``version``: a cart loaded before someone
else saved is rejected instead of silently overwriting their change.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ConcurrencyConflictError
from storefront.domain.model.cart import Cart, CartItem
from storefront.domain.model.value_objects import Money, VariantDescriptor
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CartRepository interface ---------------------------------------------

    def get_by_user(self, user_id: str) -> Cart | None:
        for raw in self._file.load():
            if raw["user_id"] == user_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        records = self._file.load()
        for i, raw in enumerate(records):
            if raw["user_id"] == cart.user_id:
                if raw.get("version", 0) != cart.version:
                    raise ConcurrencyConflictError(
                        "Cart was modified concurrently, please retry"
                    )
                cart.version += 1
                records[i] = self._to_raw(cart)
                break
        else:
            if cart.version != 0:
                raise ConcurrencyConflictError("Cart was deleted concurrently, please retry")
            cart.version += 1
            records.append(self._to_raw(cart))
        self._file.persist(records)

    def delete(self, user_id: str) -> bool:
        return self._file.remove("user_id", user_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "user_id": cart.user_id,
            "items": [
                {
                    "id": item.id,
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "variant": item.variant.to_raw(),
                }
                for item in cart.items
            ],
            "total_amount": str(cart.total_amount.amount),
            "currency": cart.total_amount.currency,
            "version": cart.version,
            "updated_at": cart.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        return Cart(
            user_id=raw["user_id"],
            items=[
                CartItem(
                    id=i["id"],
                    product_id=i["product_id"],
                    quantity=i["quantity"],
                    variant=VariantDescriptor(**i["variant"]),
                )
                for i in raw.get("items", [])
            ],
            total_amount=Money(Decimal(raw["total_amount"]), raw.get("currency", "USD")),
            version=raw.get("version", 0),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
