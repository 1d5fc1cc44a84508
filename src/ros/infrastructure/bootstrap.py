"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. Settings are read on
every call so the environment can point the CLI at another data dir.
"""

from __future__ import annotations

from ros.application.cart import CartHandler
from ros.infrastructure.config import Settings, load_settings
from ros.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from ros.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from ros.infrastructure.persistence.json_pricing_service_repository import (
    JsonPricingServiceRepository,
)
from ros.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


def settings() -> Settings:
    return load_settings()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def customer_repository() -> JsonCustomerRepository:
    return JsonCustomerRepository(settings().data_dir / "customers.json")


def pricing_service_repository() -> JsonPricingServiceRepository:
    return JsonPricingServiceRepository(settings().data_dir / "pricing_services.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(
        settings().data_dir / "orders.json",
        customer_repo=customer_repository(),
        product_repo=product_repository(),
        pricing_repo=pricing_service_repository(),
    )


def cart_handler() -> CartHandler:
    return CartHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        customer_repo=customer_repository(),
        pricing_repo=pricing_service_repository(),
        default_pricing_service_id=settings().default_pricing_service_id,
    )
