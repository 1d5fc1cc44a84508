"""Application service: Pay Order use case.

Paying a SERVED order completes it (handled by the Order aggregate).
"""

from __future__ import annotations

import logging

from ros.application.dto import OrderDTO, order_to_dto
from ros.domain.exceptions import EntityNotFoundError
from ros.domain.model.order import PaymentStatus
from ros.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class PayOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        payment_status: PaymentStatus | str = PaymentStatus.PAID,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        order.pay(payment_status)
        self._order_repo.save(order)
        logger.info(
            "Order #%s payment set to %s (status=%s)",
            order_id,
            order.payment_status.value,
            order.status.value,
        )
        return order_to_dto(order)
