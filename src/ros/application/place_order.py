"""Application service: Place Order use case.

Fills a fresh cart from product names and submits it in one step. This
is what a single CLI invocation does; a web front end would keep the
cart between requests and call ``CartHandler`` directly.
"""

from __future__ import annotations

from ros.application.cart import CartHandler
from ros.application.dto import CartItemSpec, OrderDTO
from ros.domain.exceptions import EntityNotFoundError, ValidationError
from ros.domain.repository.product_repository import ProductRepository


class PlaceOrderHandler:

    def __init__(self, cart_handler: CartHandler, product_repo: ProductRepository) -> None:
        self._cart_handler = cart_handler
        self._product_repo = product_repo

    def handle(
        self,
        customer_id: str,
        table_number: int,
        item_specs: list[CartItemSpec],
        notes: str | None = None,
        pricing_service_id: str | None = None,
    ) -> OrderDTO:
        """Place an order.

        Steps:
        1. Resolve each product name to a Product (fail if not found).
        2. Add lines at *current* prices (snapshot).
        3. Submit: the repository validates the order before writing it.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")

        cart = self._cart_handler.start(customer_id, pricing_service_id)
        for spec in item_specs:
            product = self._product_repo.get_by_name(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            self._cart_handler.add_product(cart, product.id, spec.quantity)

        return self._cart_handler.submit(cart, table_number=table_number, notes=notes)
