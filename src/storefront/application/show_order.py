"""Application services: order queries."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError
from storefront.domain.model.order import Order
from storefront.domain.model.value_objects import ensure_valid_id
from storefront.domain.repository.order_repository import OrderRepository

ADMIN_ROLE = "admin"


def load_owned_order(repo: OrderRepository, order_id: str, user_id: str) -> Order:
    """Fetch an order the user owns; someone else's order looks absent."""
    ensure_valid_id(order_id, "order")
    order = repo.get_by_id(order_id)
    if order is None or not order.is_owned_by(user_id):
        raise EntityNotFoundError("Order not found or you don't have access to it")
    return order


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, user_id: str) -> OrderDTO:
        return order_to_dto(load_owned_order(self._order_repo, order_id, user_id))


class ListUserOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: str) -> list[OrderDTO]:
        return [order_to_dto(o) for o in self._order_repo.list_by_user(user_id)]


class ListAllOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, role: str | None) -> list[OrderDTO]:
        if role != ADMIN_ROLE:
            raise ForbiddenError("You are not authorized to access all orders")
        return [order_to_dto(o) for o in self._order_repo.list_all()]
