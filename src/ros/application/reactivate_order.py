"""Application service: Reactivate Order use case."""

from __future__ import annotations

import logging

from ros.domain.exceptions import EntityNotFoundError
from ros.domain.model.order import OrderStatus
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class ReactivateOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> bool:
        """Bring a cancelled order back to NEW.

        Returns False (and writes nothing) when the order was not cancelled.
        """
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        if order.status != OrderStatus.CANCELED:
            logger.debug("Order #%s is %s, nothing to reactivate", order_id, order.status.value)
            return False

        order.reactivate()
        self._order_repo.save(order)
        logger.info("Order #%s reactivated", order_id)
        return True
