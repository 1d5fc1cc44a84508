"""Application service: List Orders use cases (queries)."""

from __future__ import annotations

from ros.application.dto import OrderDTO, order_to_dto
from ros.domain.exceptions import EntityNotFoundError
from ros.domain.model.order import OrderStatus
from ros.domain.repository.customer_repository import CustomerRepository
from ros.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        customer_repo: CustomerRepository,
    ) -> None:
        self._order_repo = order_repo
        self._customer_repo = customer_repo

    def for_customer(self, customer_id: str, include_canceled: bool = False) -> list[OrderDTO]:
        """A customer's orders, newest first. Canceled ones are hidden by default."""
        if self._customer_repo.get_by_id(customer_id) is None:
            raise EntityNotFoundError(f"Customer #{customer_id} not found")
        return [
            order_to_dto(order)
            for order in self._order_repo.list_by_customer(customer_id)
            if include_canceled or order.status != OrderStatus.CANCELED
        ]

    def all(self) -> list[OrderDTO]:
        """Every order, for the employee board."""
        return [order_to_dto(order) for order in self._order_repo.list_all()]
