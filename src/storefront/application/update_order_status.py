"""Application service: Update Order Status use case.

Status changes follow the transition table on the Order aggregate, the
same one cancellation uses.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.show_order import load_owned_order
from storefront.domain.exceptions import MissingFieldError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, user_id: str, status: str | None) -> OrderDTO:
        if not status:
            raise MissingFieldError("Status is required")
        target = OrderStatus.parse(status)

        order = load_owned_order(self._order_repo, order_id, user_id)
        previous = order.status
        order.transition_to(target)
        self._order_repo.save(order)

        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=previous.value,
            to_status=target.value,
        )
        return order_to_dto(order)
