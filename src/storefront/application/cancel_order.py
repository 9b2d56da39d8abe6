"""Application service: Cancel Order use case (user-initiated).

Orders that have shipped or been delivered cannot be cancelled.
"""

from __future__ import annotations

import structlog

from storefront.application.dto import OrderDTO, order_to_dto
from storefront.application.show_order import load_owned_order
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, user_id: str) -> OrderDTO:
        order = load_owned_order(self._order_repo, order_id, user_id)
        order.cancel()
        self._order_repo.save(order)

        logger.info("Order cancelled", order_id=order_id, user_id=user_id)
        return order_to_dto(order)
