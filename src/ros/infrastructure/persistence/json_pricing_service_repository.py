"""JSON-file-backed implementation of PricingServiceRepository.

A fresh store is seeded with the "Regular" service under ID "1", the
service new carts use unless configured otherwise.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ros.domain.model.pricing import (
    HolidayPricingService,
    PricingService,
    RegularPricingService,
)
from ros.domain.repository.pricing_service_repository import (
    PricingServiceRepository,
)

_SEED = [{"id": "1", "kind": RegularPricingService.kind, "name": "Regular"}]


class JsonPricingServiceRepository(PricingServiceRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- PricingServiceRepository interface -----------------------------------

    def get_by_id(self, service_id: str) -> PricingService | None:
        for raw in self._load_raw():
            if raw["id"] == service_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[PricingService]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, service: PricingService) -> None:
        services = [raw for raw in self._load_raw() if raw["id"] != service.id]
        services.append(self._to_raw(service))
        self._persist_raw(services)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(service: PricingService) -> dict:
        raw = {
            "id": service.id,
            "kind": service.kind,
            "name": service.name,
            "discount_rate": str(service.discount_rate),
        }
        if isinstance(service, HolidayPricingService):
            raw["holiday_name"] = service.holiday_name
            raw["holiday_start"] = service.holiday_start.isoformat()
            raw["holiday_end"] = service.holiday_end.isoformat()
        return raw

    @staticmethod
    def _to_domain(raw: dict) -> PricingService:
        if raw["kind"] == HolidayPricingService.kind:
            return HolidayPricingService(
                id=raw["id"],
                name=raw["name"],
                holiday_name=raw["holiday_name"],
                holiday_start=datetime.fromisoformat(raw["holiday_start"]),
                holiday_end=datetime.fromisoformat(raw["holiday_end"]),
                discount_rate=Decimal(raw["discount_rate"]),
            )
        if raw["kind"] == RegularPricingService.kind:
            service = RegularPricingService(id=raw["id"], name=raw["name"])
            service.discount_rate = Decimal(raw.get("discount_rate", "0"))
            return service
        raise ValueError(f"Unknown pricing service kind {raw['kind']!r} (id={raw['id']!r})")

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, services: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(services, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw(list(_SEED))
