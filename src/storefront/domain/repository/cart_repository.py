"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_user(self, user_id: str) -> Cart | None:
        """Return the user's cart, or None if they have none."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist a new or updated cart.

        Raises ConcurrencyConflictError if the stored cart's version differs
        from ``cart.version``; on success the version is bumped in place.
        """

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Delete the user's cart; returns False if there was none."""
