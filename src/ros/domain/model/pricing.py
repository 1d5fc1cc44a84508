"""Pricing services: pluggable discount policies attached to orders.

An order only reads ``discount_rate`` and, unless the variant declares
itself ``always_applicable``, asks ``is_applicable(order)`` before using
the rate. New promotions are new subclasses; the order's pricing stays
untouched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from ros.domain.exceptions import ValidationError

if TYPE_CHECKING:
    from ros.domain.model.order import Order

HOLIDAY_DISCOUNT_RATE = Decimal("0.10")


class PricingService(ABC):
    """Base class for every discount policy.

    Variants are conditionally applicable unless they say otherwise, so a
    non-zero rate is never applied without an applicability check.
    """

    kind: str = ""
    always_applicable: bool = False

    def __init__(self, id: str | None, name: str, discount_rate: Decimal) -> None:
        self.id = id
        self.name = name
        self.discount_rate = discount_rate

    # --- Administrative edits -------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        if not value or not value.strip():
            raise ValidationError("Pricing service name must not be blank")
        self._name = value.strip()

    @property
    def discount_rate(self) -> Decimal:
        return self._discount_rate

    @discount_rate.setter
    def discount_rate(self, value: Decimal) -> None:
        if not isinstance(value, Decimal):
            raise ValidationError(
                f"Discount rate must be a Decimal, got {type(value).__name__}"
            )
        if value < Decimal("0") or value > Decimal("1"):
            raise ValidationError("Discount rate must be between 0 and 1")
        self._discount_rate = value

    # --- Capability interface -------------------------------------------------

    @abstractmethod
    def is_applicable(self, order: Order) -> bool:
        """Return True if this service's discount applies to *order*."""

    def apply(self, order: Order) -> None:
        """Attach this service to *order*.

        No amount is changed here; the order reads the rate back when it
        computes its final price.
        """
        if order is None:
            raise ValidationError("Order must not be None")
        order.pricing_service = self

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, name={self._name!r}, rate={self._discount_rate})"


class RegularPricingService(PricingService):
    """The everyday policy: no discount."""

    kind = "REGULAR"
    always_applicable = True

    def __init__(self, id: str | None, name: str) -> None:
        super().__init__(id, name, Decimal("0"))

    def is_applicable(self, order: Order) -> bool:
        return True


class HolidayPricingService(PricingService):
    """A 10% discount for orders placed inside an inclusive time window."""

    kind = "HOLIDAY"

    def __init__(
        self,
        id: str | None,
        name: str,
        holiday_name: str,
        holiday_start: datetime,
        holiday_end: datetime,
        discount_rate: Decimal = HOLIDAY_DISCOUNT_RATE,
    ) -> None:
        super().__init__(id, name, discount_rate)
        self.holiday_name = holiday_name
        self.holiday_start = holiday_start
        self.holiday_end = holiday_end

    @staticmethod
    def create(
        name: str,
        holiday_name: str,
        holiday_start: datetime,
        holiday_end: datetime,
        id: str | None = None,
    ) -> HolidayPricingService:
        """Create a holiday service with the fixed holiday rate."""
        if not holiday_name or not holiday_name.strip():
            raise ValidationError("Holiday name must not be blank")
        if holiday_start is None or holiday_end is None:
            raise ValidationError("Holiday start and end times are required")
        if holiday_start.tzinfo is None or holiday_end.tzinfo is None:
            raise ValidationError("Holiday start and end times must be timezone-aware")
        if holiday_end < holiday_start:
            raise ValidationError("Holiday end time must not be before its start time")
        return HolidayPricingService(
            id=id,
            name=name,
            holiday_name=holiday_name.strip(),
            holiday_start=holiday_start,
            holiday_end=holiday_end,
        )

    def is_applicable(self, order: Order) -> bool:
        if order is None:
            raise ValidationError("Order must not be None")
        if order.order_time is None:
            return False
        return self.holiday_start <= order.order_time <= self.holiday_end
