"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines and feedback.
All pricing rules and lifecycle transitions are enforced here.

    NEW -> IN_PROGRESS -> SERVED -> COMPLETED
    NEW -> CANCELED -> NEW (reactivation)

An order that is SERVED and PAID at the same time becomes COMPLETED.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from ros.domain.exceptions import (
    InvalidStateError,
    OrderValidationError,
    ValidationError,
)
from ros.domain.model.value_objects import Money

if TYPE_CHECKING:
    from ros.domain.model.customer import Customer
    from ros.domain.model.feedback import Feedback
    from ros.domain.model.order_line import OrderLine
    from ros.domain.model.pricing import PricingService


class OrderStatus(Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    SERVED = "SERVED"
    CANCELED = "CANCELED"
    COMPLETED = "COMPLETED"

    @staticmethod
    def parse(value: OrderStatus | str) -> OrderStatus:
        if isinstance(value, OrderStatus):
            return value
        try:
            return OrderStatus(str(value).strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown order status: {value!r}") from exc


class PaymentStatus(Enum):
    UNPAID = "UNPAID"
    PAID = "PAID"

    @staticmethod
    def parse(value: PaymentStatus | str) -> PaymentStatus:
        if isinstance(value, PaymentStatus):
            return value
        try:
            return PaymentStatus(str(value).strip().upper())
        except ValueError as exc:
            raise ValidationError(f"Unknown payment status: {value!r}") from exc


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
SERVICE_FEE_RATE = Decimal("0.10")

# Lines can no longer be added, removed or resized once the food is served.
FROZEN_LINE_STATUSES = (OrderStatus.SERVED, OrderStatus.COMPLETED)

# Status/payment updates are ignored for finished orders.
FINISHED_STATUSES = (OrderStatus.CANCELED, OrderStatus.COMPLETED)

DELETABLE_STATUSES = (OrderStatus.NEW, OrderStatus.CANCELED)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order:
    """Aggregate root for a single dining transaction.

    Use ``Order.create()`` for new orders (carts) — it validates the
    arguments and links the customer and pricing service. ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating; lines and feedback passed to it are
    bound to the new order.
    """

    def __init__(
        self,
        id: int | None,
        customer: Customer | None = None,
        pricing_service: PricingService | None = None,
        table_number: int | None = None,
        order_time: datetime | None = None,
        status: OrderStatus = OrderStatus.NEW,
        payment_status: PaymentStatus = PaymentStatus.UNPAID,
        notes: str | None = None,
        lines: Iterable[OrderLine] = (),
        feedbacks: Iterable[Feedback] = (),
    ) -> None:
        self.id = id
        self._customer = customer
        self._pricing_service = pricing_service
        self._table_number = table_number
        self._order_time = order_time
        self._status = status
        self._payment_status = payment_status
        self.notes = notes
        self._lines: list[OrderLine] = []
        self._feedbacks: list[Feedback] = []

        for line in lines:
            line._bind(self)
            self._lines.append(line)
        for feedback in feedbacks:
            feedback.order = self
            self._feedbacks.append(feedback)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: Customer,
        pricing_service: PricingService,
        order_time: datetime | None = None,
        table_number: int | None = None,
        notes: str | None = None,
    ) -> Order:
        """Start a new NEW/UNPAID order for *customer*."""
        order_time = order_time or _utcnow()
        if order_time.tzinfo is None:
            raise ValidationError("Order time must be timezone-aware")
        if order_time > _utcnow():
            raise ValidationError("Order time must not be in the future")
        if pricing_service is None:
            raise ValidationError("Pricing service must not be None")

        order = Order(id=None, order_time=order_time, notes=notes)
        if table_number is not None:
            order.table_number = table_number
        pricing_service.apply(order)
        order.assign_customer(customer)
        return order

    # --- Simple attributes ----------------------------------------------------

    @property
    def order_time(self) -> datetime | None:
        return self._order_time

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def payment_status(self) -> PaymentStatus:
        return self._payment_status

    @property
    def table_number(self) -> int | None:
        return self._table_number

    @table_number.setter
    def table_number(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValidationError("Table number must be at least 1")
        self._table_number = value

    @property
    def customer(self) -> Customer | None:
        return self._customer

    def assign_customer(self, customer: Customer) -> None:
        """Set the owning customer. It can be set once and never changed."""
        if customer is None:
            raise ValidationError("Customer must not be None")
        if self._customer is not None and self._customer is not customer:
            raise ValidationError("Order customer cannot be changed")
        self._customer = customer
        customer.place_order(self)

    @property
    def pricing_service(self) -> PricingService | None:
        return self._pricing_service

    @pricing_service.setter
    def pricing_service(self, service: PricingService) -> None:
        if service is None:
            raise ValidationError("Pricing service must not be None")
        self._pricing_service = service

    @property
    def is_frozen(self) -> bool:
        """True once lines can no longer change."""
        return self._status in FROZEN_LINE_STATUSES

    # --- Lines ----------------------------------------------------------------

    @property
    def lines(self) -> tuple[OrderLine, ...]:
        return tuple(self._lines)

    def add_line(self, line: OrderLine) -> None:
        """Register *line*; lines normally arrive via ``OrderLine.create()``."""
        if line is None:
            raise ValidationError("Order line must not be None")
        if line.order is not self:
            raise ValidationError("Order line must reference this order")
        if line in self._lines:
            return
        if self.is_frozen:
            raise InvalidStateError(
                f"Cannot add lines to a {self._status.value} order"
            )
        if any(other.product is line.product for other in self._lines):
            raise ValidationError(
                f"Order already contains a line for '{line.product.name}'"
            )
        self._lines.append(line)

    def remove_line(self, line: OrderLine) -> None:
        if line is None:
            raise ValidationError("Order line must not be None")
        if line.order is not self:
            raise ValidationError("Order line must reference this order")
        if self.is_frozen:
            raise InvalidStateError(
                f"Cannot remove lines from a {self._status.value} order"
            )
        line.unlink()

    def find_line(self, product_id: str) -> OrderLine | None:
        for line in self._lines:
            if line.product is not None and line.product.id == product_id:
                return line
        return None

    def _discard_line(self, line: OrderLine) -> None:
        if line in self._lines:
            self._lines.remove(line)

    # --- Feedback -------------------------------------------------------------

    @property
    def feedbacks(self) -> tuple[Feedback, ...]:
        return tuple(self._feedbacks)

    def add_feedback(self, feedback: Feedback) -> None:
        if feedback is None:
            raise ValidationError("Feedback must not be None")
        if feedback.order is not self:
            raise ValidationError("Feedback is associated with another order")
        if feedback not in self._feedbacks:
            self._feedbacks.append(feedback)

    def _discard_feedback(self, feedback: Feedback) -> None:
        if feedback in self._feedbacks:
            self._feedbacks.remove(feedback)

    # --- State transitions ----------------------------------------------------

    def update_status_and_payment(
        self,
        status: OrderStatus | str,
        payment_status: PaymentStatus | str,
    ) -> None:
        """Employee update of both statuses at once.

        Both tokens are parsed before anything changes. CANCELED and
        COMPLETED orders are left untouched.
        """
        new_status = OrderStatus.parse(status)
        new_payment = PaymentStatus.parse(payment_status)

        if self._status in FINISHED_STATUSES:
            return

        self._status = new_status
        self._payment_status = new_payment
        self._complete_if_settled()

    def cancel(self) -> None:
        """Transition NEW (and UNPAID) -> CANCELED."""
        if self._status != OrderStatus.NEW or self._payment_status != PaymentStatus.UNPAID:
            raise InvalidStateError(
                f"Only NEW and UNPAID orders can be cancelled "
                f"(status={self._status.value}, payment={self._payment_status.value})"
            )
        self._status = OrderStatus.CANCELED

    def reactivate(self) -> None:
        """Transition CANCELED -> NEW. Does nothing for any other status."""
        if self._status == OrderStatus.CANCELED:
            self._status = OrderStatus.NEW

    def pay(self, payment_status: PaymentStatus | str = PaymentStatus.PAID) -> None:
        """Record a payment; a SERVED order that is now PAID is COMPLETED."""
        new_payment = PaymentStatus.parse(payment_status)
        if self._status in FINISHED_STATUSES:
            raise InvalidStateError(
                f"Cannot change the payment of a {self._status.value} order"
            )
        self._payment_status = new_payment
        self._complete_if_settled()

    def ensure_deletable(self) -> None:
        if self._status not in DELETABLE_STATUSES:
            raise InvalidStateError(
                f"Only NEW or CANCELED orders can be deleted (status={self._status.value})"
            )

    def discard(self) -> None:
        """Unlink everything this order owns ahead of a hard delete."""
        for line in list(self._lines):
            line.unlink()
        for feedback in list(self._feedbacks):
            feedback.detach()
        if self._customer is not None:
            self._customer._forget_order(self)

    def _complete_if_settled(self) -> None:
        if self._status == OrderStatus.SERVED and self._payment_status == PaymentStatus.PAID:
            self._status = OrderStatus.COMPLETED

    # --- Computed properties --------------------------------------------------

    @property
    def total_amount(self) -> Money:
        """Sum of line subtotals, before the service fee."""
        return Money.total(line.subtotal for line in self._lines)

    @property
    def service_fee(self) -> Money:
        return self.total_amount * SERVICE_FEE_RATE

    @property
    def applied_discount_rate(self) -> Decimal:
        service = self._pricing_service
        if service is None or service.discount_rate <= 0:
            return Decimal("0")
        if service.always_applicable or service.is_applicable(self):
            return service.discount_rate
        return Decimal("0")

    @property
    def final_price(self) -> Money:
        """Subtotal plus service fee, minus any applicable discount."""
        return Money(self._final_amount(), self.total_amount.currency)

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity.value for line in self._lines)

    def _final_amount(self) -> Decimal:
        total = self.total_amount
        base = total + total * SERVICE_FEE_RATE
        return base.amount * (Decimal("1") - self.applied_discount_rate)

    # --- Pre-persistence checkpoint -------------------------------------------

    def validate(self, now: datetime | None = None) -> None:
        """Raise OrderValidationError listing every broken invariant."""
        now = now or _utcnow()
        violations: list[str] = []

        if self._order_time is None:
            violations.append("order time must be set")
        elif self._order_time > now:
            violations.append("order time must not be in the future")
        if self._table_number is None or self._table_number < 1:
            violations.append("table number must be at least 1")
        if self._customer is None:
            violations.append("customer must not be None")
        if self._pricing_service is None:
            violations.append("pricing service must not be None")
        if (
            self._status == OrderStatus.COMPLETED
            and self._payment_status != PaymentStatus.PAID
        ):
            violations.append("a COMPLETED order must be PAID")
        if self._final_amount() < 0:
            violations.append("final price must not be negative")

        if violations:
            raise OrderValidationError(violations)

    def __repr__(self) -> str:
        return (
            f"Order(id={self.id!r}, table={self._table_number!r}, "
            f"status={self._status.value}, payment={self._payment_status.value}, "
            f"lines={len(self._lines)})"
        )
