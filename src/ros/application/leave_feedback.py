"""Application service: Leave Feedback use case.

Customers can comment on their own orders once they are COMPLETED.
"""

from __future__ import annotations

import logging

from ros.application.dto import FeedbackDTO
from ros.domain.exceptions import EntityNotFoundError, InvalidStateError
from ros.domain.model.feedback import Feedback
from ros.domain.model.order import OrderStatus
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class LeaveFeedbackHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, customer_id: str, description: str) -> FeedbackDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        if order.customer is None or order.customer.id != customer_id:
            raise EntityNotFoundError(
                f"Order #{order_id} not found for customer #{customer_id}"
            )
        if order.status != OrderStatus.COMPLETED:
            raise InvalidStateError(
                f"Feedback can only be left on COMPLETED orders (status={order.status.value})"
            )

        feedback = Feedback.create(description, order=order, customer=order.customer)
        self._order_repo.save(order)
        logger.info("Feedback recorded for order #%s", order_id)
        return FeedbackDTO(
            description=feedback.description,
            submitted_at=feedback.submitted_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
