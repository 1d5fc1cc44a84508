"""Application service: Update Order Status use case (employee board).

Employees move an order through NEW -> IN_PROGRESS -> SERVED and record
payment in one step. Finished orders (CANCELED, COMPLETED) are left
untouched by the aggregate.
"""

from __future__ import annotations

import logging

from ros.application.dto import OrderDTO, order_to_dto
from ros.domain.exceptions import EntityNotFoundError
from ros.domain.model.order import OrderStatus, PaymentStatus
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        status: OrderStatus | str,
        payment_status: PaymentStatus | str,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        previous = (order.status, order.payment_status)
        order.update_status_and_payment(status, payment_status)

        if (order.status, order.payment_status) == previous:
            logger.debug("Order #%s unchanged (%s)", order_id, order.status.value)
            return order_to_dto(order)

        self._order_repo.save(order)
        logger.info(
            "Order #%s moved to %s/%s",
            order_id,
            order.status.value,
            order.payment_status.value,
        )
        return order_to_dto(order)
