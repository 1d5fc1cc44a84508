"""Feedback left by a customer on one of their orders."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from ros.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from ros.domain.model.customer import Customer
    from ros.domain.model.order import Order


@dataclass(eq=False)
class Feedback:
    """Use ``Feedback.create()`` for new feedback; it links both sides.

    ``order`` is bound by the ``Order`` constructor when the repository
    rebuilds a persisted order.
    """

    description: str
    submitted_at: datetime
    customer: Customer | None = field(repr=False)
    order: Order | None = field(default=None, repr=False)

    @staticmethod
    def create(
        description: str,
        order: Order,
        customer: Customer,
        submitted_at: datetime | None = None,
    ) -> Feedback:
        if not description or not description.strip():
            raise ValidationError("Feedback description is required")
        if order is None:
            raise ValidationError("Order must not be None")
        if customer is None:
            raise ValidationError("Customer must not be None")
        if order.customer is not customer:
            raise ValidationError("Only the customer who placed the order can leave feedback")

        submitted_at = submitted_at or datetime.now(timezone.utc)
        if submitted_at.tzinfo is None:
            raise ValidationError("Feedback submission time must be timezone-aware")
        if submitted_at > datetime.now(timezone.utc):
            raise ValidationError("Feedback submission time must not be in the future")

        feedback = Feedback(
            description=description.strip(),
            submitted_at=submitted_at,
            customer=customer,
            order=order,
        )
        order.add_feedback(feedback)
        customer.leave_feedback(feedback)
        return feedback

    def detach(self) -> None:
        """Remove this feedback from its order and its customer."""
        order, customer = self.order, self.customer
        self.order = None
        self.customer = None
        if order is not None:
            order._discard_feedback(self)
        if customer is not None:
            customer._remove_feedback(self)
