"""Application service: administrative creation of pricing services."""

from __future__ import annotations

import logging
from datetime import datetime

from ros.domain.model.pricing import (
    HolidayPricingService,
    PricingService,
    RegularPricingService,
)
from ros.domain.repository.pricing_service_repository import (
    PricingServiceRepository,
)

logger = logging.getLogger(__name__)


class AddPricingServiceHandler:

    def __init__(self, pricing_repo: PricingServiceRepository) -> None:
        self._pricing_repo = pricing_repo

    def add_regular(self, name: str) -> PricingService:
        service = RegularPricingService(id=self._next_id(), name=name)
        return self._store(service)

    def add_holiday(
        self,
        name: str,
        holiday_name: str,
        start: datetime,
        end: datetime,
    ) -> PricingService:
        service = HolidayPricingService.create(
            name=name,
            holiday_name=holiday_name,
            holiday_start=start,
            holiday_end=end,
            id=self._next_id(),
        )
        return self._store(service)

    # --- Internal helpers -----------------------------------------------------

    def _next_id(self) -> str:
        services = self._pricing_repo.list_all()
        if not services:
            return "1"
        return str(max(int(s.id) for s in services) + 1)

    def _store(self, service: PricingService) -> PricingService:
        self._pricing_repo.save(service)
        logger.info("%s pricing service #%s '%s' added", service.kind, service.id, service.name)
        return service
