"""Abstract repository for pricing services."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ros.domain.model.pricing import PricingService


class PricingServiceRepository(ABC):

    @abstractmethod
    def get_by_id(self, service_id: str) -> PricingService | None:
        """Return a pricing service by ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[PricingService]:
        """Return every pricing service."""

    @abstractmethod
    def save(self, service: PricingService) -> None:
        """Persist a new or updated pricing service."""
