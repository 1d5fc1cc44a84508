"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An argument was malformed: a missing reference, a non-positive
    quantity, a negative price, a blank name or an unknown enum token."""


class InvalidStateError(DomainException):
    """An operation was requested while the aggregate is in a state that
    forbids it (e.g. cancelling an order that is already in progress)."""


class OrderValidationError(ValidationError):
    """The pre-persistence checkpoint found one or more broken invariants.

    The write is rejected; callers should surface the violations rather
    than retry.
    """

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__("Order is invalid: " + "; ".join(self.violations))


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""
