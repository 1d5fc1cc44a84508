"""Application service: the customer's shopping cart.

A cart is a transient NEW/UNPAID Order. It is kept by the caller (a web
session, a CLI invocation) and only reaches the order repository when
it is submitted.
"""

from __future__ import annotations

import logging

from ros.application.dto import OrderDTO, order_to_dto
from ros.domain.exceptions import EntityNotFoundError, ValidationError
from ros.domain.model.order import Order
from ros.domain.model.order_line import OrderLine
from ros.domain.model.value_objects import Quantity
from ros.domain.repository.customer_repository import CustomerRepository
from ros.domain.repository.order_repository import OrderRepository
from ros.domain.repository.pricing_service_repository import (
    PricingServiceRepository,
)
from ros.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class CartHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        customer_repo: CustomerRepository,
        pricing_repo: PricingServiceRepository,
        default_pricing_service_id: str,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._customer_repo = customer_repo
        self._pricing_repo = pricing_repo
        self._default_pricing_service_id = default_pricing_service_id

    def start(self, customer_id: str, pricing_service_id: str | None = None) -> Order:
        """Open an empty cart for a customer."""
        customer = self._customer_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer #{customer_id} not found")

        service_id = pricing_service_id or self._default_pricing_service_id
        service = self._pricing_repo.get_by_id(service_id)
        if service is None:
            raise EntityNotFoundError(f"Pricing service #{service_id} not found")

        cart = Order.create(customer=customer, pricing_service=service)
        logger.debug("Cart started for customer %s with %s", customer_id, service.name)
        return cart

    def add_product(self, cart: Order, product_id: str, quantity: int = 1) -> OrderLine:
        """Add a product at its current price, or bump the existing line."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        line = cart.find_line(product_id)
        if line is not None:
            increment = Quantity(quantity)
            line.set_quantity(line.quantity.value + increment.value)
            return line
        return OrderLine.create(
            product=product,
            order=cart,
            quantity=quantity,
            unit_price=product.price,  # <-- price snapshot
        )

    def update_quantity(self, cart: Order, product_id: str, quantity: int) -> None:
        self._require_line(cart, product_id).set_quantity(quantity)

    def remove_product(self, cart: Order, product_id: str) -> None:
        cart.remove_line(self._require_line(cart, product_id))

    def summary(self, cart: Order) -> OrderDTO:
        return order_to_dto(cart)

    def submit(self, cart: Order, table_number: int, notes: str | None = None) -> OrderDTO:
        """Validate and persist the cart as a placed order."""
        if not cart.lines:
            raise ValidationError("Cannot submit an empty cart")
        cart.table_number = table_number
        cart.notes = notes.strip() if notes and notes.strip() else None

        self._order_repo.save(cart)
        logger.info(
            "Order #%s placed at table %s (%s)", cart.id, table_number, cart.final_price
        )
        return order_to_dto(cart)

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _require_line(cart: Order, product_id: str) -> OrderLine:
        line = cart.find_line(product_id)
        if line is None:
            raise ValidationError(f"Product ID '{product_id}' is not in the cart")
        return line
