"""JSON-file-backed implementation of OrderRepository.

Orders are stored with their lines and feedback embedded; customers,
products and pricing services are stored by ID and resolved through
their own repositories when an order is loaded.
"""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from ros.domain.exceptions import EntityNotFoundError
from ros.domain.model.customer import Customer
from ros.domain.model.feedback import Feedback
from ros.domain.model.order import Order, OrderStatus, PaymentStatus
from ros.domain.model.order_line import OrderLine
from ros.domain.model.pricing import PricingService
from ros.domain.model.product import Product
from ros.domain.model.value_objects import Money, Quantity
from ros.domain.repository.customer_repository import CustomerRepository
from ros.domain.repository.order_repository import OrderRepository
from ros.domain.repository.pricing_service_repository import (
    PricingServiceRepository,
)
from ros.domain.repository.product_repository import ProductRepository


class JsonOrderRepository(OrderRepository):

    def __init__(
        self,
        file_path: Path,
        customer_repo: CustomerRepository,
        product_repo: ProductRepository,
        pricing_repo: PricingServiceRepository,
    ) -> None:
        self._file_path = file_path
        self._customer_repo = customer_repo
        self._product_repo = product_repo
        self._pricing_repo = pricing_repo
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> int:
        orders = self._load_raw()
        if not orders:
            return 1
        return max(o["id"] for o in orders) + 1

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain_all([raw])[0]
        return None

    def list_by_customer(self, customer_id: str) -> list[Order]:
        raws = [raw for raw in self._load_raw() if raw["customer_id"] == customer_id]
        orders = self._to_domain_all(raws)
        return sorted(orders, key=lambda o: o.order_time, reverse=True)

    def list_all(self) -> list[Order]:
        return self._to_domain_all(self._load_raw())

    def delete_by_id(self, order_id: int) -> None:
        orders = [raw for raw in self._load_raw() if raw["id"] != order_id]
        self._persist_raw(orders)

    def _write(self, order: Order) -> None:
        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer_id": order.customer.id,
            "pricing_service_id": order.pricing_service.id,
            "table_number": order.table_number,
            "order_time": order.order_time.isoformat(),
            "status": order.status.value,
            "payment_status": order.payment_status.value,
            "notes": order.notes,
            "lines": [
                {
                    "product_id": line.product.id,
                    "quantity": line.quantity.value,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                }
                for line in order.lines
            ],
            "feedbacks": [
                {
                    "description": feedback.description,
                    "submitted_at": feedback.submitted_at.isoformat(),
                }
                for feedback in order.feedbacks
            ],
        }

    def _to_domain_all(self, raws: list[dict]) -> list[Order]:
        # One lookup per referenced entity, shared by every order of the batch.
        customers: dict[str, Customer] = {}
        products: dict[str, Product] = {}
        services: dict[str, PricingService] = {}
        return [self._to_domain(raw, customers, products, services) for raw in raws]

    def _to_domain(
        self,
        raw: dict,
        customers: dict[str, Customer],
        products: dict[str, Product],
        services: dict[str, PricingService],
    ) -> Order:
        customer = self._resolve(
            customers, raw["customer_id"], self._customer_repo.get_by_id, "Customer"
        )
        service = self._resolve(
            services,
            raw["pricing_service_id"],
            self._pricing_repo.get_by_id,
            "Pricing service",
        )
        lines = [
            OrderLine(
                product=self._resolve(
                    products, i["product_id"], self._product_repo.get_by_id, "Product"
                ),
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
            )
            for i in raw["lines"]
        ]
        feedbacks = [
            Feedback(
                description=f["description"],
                submitted_at=datetime.fromisoformat(f["submitted_at"]),
                customer=customer,
            )
            for f in raw.get("feedbacks", [])
        ]
        order = Order(
            id=raw["id"],
            customer=customer,
            pricing_service=service,
            table_number=raw["table_number"],
            order_time=datetime.fromisoformat(raw["order_time"]),
            status=OrderStatus(raw["status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            notes=raw.get("notes"),
            lines=lines,
            feedbacks=feedbacks,
        )
        customer.place_order(order)
        for feedback in feedbacks:
            customer.leave_feedback(feedback)
        return order

    @staticmethod
    def _resolve(cache: dict, key: str, loader, label: str):
        if key not in cache:
            entity = loader(key)
            if entity is None:
                raise EntityNotFoundError(f"{label} #{key} referenced by an order is missing")
            cache[key] = entity
        return cache[key]

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
