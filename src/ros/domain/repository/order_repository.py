"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ros.domain.model.order import Order


class OrderRepository(ABC):
    """Every implementation saves through ``save()``, which runs the
    order's pre-persistence validation before anything is written."""

    @abstractmethod
    def next_id(self) -> int:
        """Generate the next unique order ID."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_customer(self, customer_id: str) -> list[Order]:
        """Return a customer's orders, newest first."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order."""

    @abstractmethod
    def delete_by_id(self, order_id: int) -> None:
        """Permanently remove an order and everything it owns."""

    def save(self, order: Order) -> Order:
        """Validate, then persist a new or updated order."""
        order.validate()
        if order.id is None:
            order.id = self.next_id()
        self._write(order)
        return order

    @abstractmethod
    def _write(self, order: Order) -> None:
        """Store an already validated order."""
