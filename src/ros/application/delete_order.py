"""Application service: Delete Order use case.

Hard-deletes an order together with its lines and feedback. Only NEW
and CANCELED orders may be deleted.
"""

from __future__ import annotations

import logging

from ros.domain.exceptions import EntityNotFoundError
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.ensure_deletable()
        order.discard()
        self._order_repo.delete_by_id(order_id)
        logger.info("Order #%s deleted", order_id)
