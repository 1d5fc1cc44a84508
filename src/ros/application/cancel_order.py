"""Application service: Cancel Order use case.

Only NEW orders that have not been paid can be cancelled; the Order
aggregate enforces that rule.
"""

from __future__ import annotations

import logging

from ros.domain.exceptions import EntityNotFoundError
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.cancel()
        self._order_repo.save(order)
        logger.info("Order #%s cancelled", order_id)
