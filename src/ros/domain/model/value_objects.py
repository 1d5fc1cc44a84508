"""Value objects for prices and portions.

Menu prices, line subtotals and bill totals are all ``Money``; the number
of portions on an order line is a ``Quantity``. Both are immutable and
refuse invalid values at construction time.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ros.domain.exceptions import ValidationError

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Money:
    """A non-negative amount in one currency.

    Arithmetic keeps full Decimal precision; rounding to cents happens
    only when the amount is displayed on a bill.
    """

    amount: Decimal
    currency: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        # bool is an int subclass
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def to_cents(self) -> Decimal:
        return self.amount.quantize(CENT, rounding=ROUND_HALF_UP)

    def __str__(self) -> str:
        return f"${self.to_cents()}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Parse a price typed by a person (``"7.50"``) into Money."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = "USD") -> Money:
        return Money(Decimal("0.00"), currency)

    @staticmethod
    def total(amounts: Iterable[Money], currency: str = "USD") -> Money:
        result = Money.zero(currency)
        for amount in amounts:
            result = result + amount
        return result


@dataclass(frozen=True)
class Quantity:
    """Number of portions on an order line; always at least one."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Address:
    """Where a customer lives. Country and postal code are mandatory."""

    country: str
    postal_code: str
    city: str | None = None
    street: str | None = None
    house_number: str | None = None

    def __post_init__(self) -> None:
        if not self.country or not self.country.strip():
            raise ValidationError("Country is required")
        if not self.postal_code or not self.postal_code.strip():
            raise ValidationError("Postal code is required")
        for label, value in (
            ("City", self.city),
            ("Street", self.street),
            ("House number", self.house_number),
        ):
            if value is not None and not value.strip():
                raise ValidationError(f"{label} must not be blank if present")

    def __str__(self) -> str:
        street = " ".join(p for p in (self.street, self.house_number) if p)
        locality = " ".join(p for p in (self.postal_code, self.city) if p)
        return ", ".join(p for p in (street, locality, self.country) if p)
