"""Customer aggregate.

A customer owns the orders they placed and the feedback they left. Both
collections are exposed read-only; orders and feedback register
themselves through ``place_order`` / ``leave_feedback``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ros.domain.exceptions import ValidationError
from ros.domain.model.value_objects import Address

if TYPE_CHECKING:
    from ros.domain.model.feedback import Feedback
    from ros.domain.model.order import Order

PHONE_PATTERN = re.compile(r"^\+?[0-9]{7,15}$")


@dataclass(eq=False)
class Customer:
    id: str
    name: str
    email: str
    phone: str
    address: Address
    surname: str | None = None
    _orders: list[Order] = field(default_factory=list, init=False, repr=False)
    _feedbacks: list[Feedback] = field(default_factory=list, init=False, repr=False)

    @staticmethod
    def create(
        id: str,
        name: str,
        email: str,
        phone: str,
        address: Address,
        surname: str | None = None,
    ) -> Customer:
        """Register a new customer, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Customer name is required")
        if surname is not None and not surname.strip():
            raise ValidationError("Customer surname must not be blank if present")
        if not email or "@" not in email:
            raise ValidationError(f"Invalid email address: {email!r}")
        if not phone or not PHONE_PATTERN.match(phone):
            raise ValidationError(f"Invalid phone number format: {phone!r}")
        if not isinstance(address, Address):
            raise ValidationError("Customer address is required")
        return Customer(
            id=id,
            name=name.strip(),
            email=email.strip().lower(),
            phone=phone,
            address=address,
            surname=surname.strip() if surname else None,
        )

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}" if self.surname else self.name

    # --- Orders ---------------------------------------------------------------

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def place_order(self, order: Order) -> None:
        if order is None:
            raise ValidationError("Order must not be None")
        if order.customer is not self:
            raise ValidationError("This order does not belong to the customer")
        if order not in self._orders:
            self._orders.append(order)

    def _forget_order(self, order: Order) -> None:
        if order in self._orders:
            self._orders.remove(order)

    # --- Feedback -------------------------------------------------------------

    @property
    def feedbacks(self) -> tuple[Feedback, ...]:
        return tuple(self._feedbacks)

    def leave_feedback(self, feedback: Feedback) -> None:
        if feedback is None:
            raise ValidationError("Feedback must not be None")
        if feedback.customer is not self:
            raise ValidationError("Feedback is attached to another customer")
        if feedback not in self._feedbacks:
            self._feedbacks.append(feedback)

    def _remove_feedback(self, feedback: Feedback) -> None:
        if feedback in self._feedbacks:
            self._feedbacks.remove(feedback)
