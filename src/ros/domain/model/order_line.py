"""OrderLine: one product's quantity and locked-in unit price in an order."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ros.domain.exceptions import InvalidStateError, ValidationError
from ros.domain.model.value_objects import Money, Quantity

if TYPE_CHECKING:
    from ros.domain.model.order import Order
    from ros.domain.model.product import Product


class OrderLine:
    """Captures the price of a product at the moment it was added.

    Use ``OrderLine.create()`` for new lines: it validates the input and
    links the line into both the order and the product. ``__init__`` only
    stores values so the repository can rebuild persisted lines; those are
    bound to their order by the ``Order`` constructor.
    """

    def __init__(
        self,
        product: Product,
        quantity: Quantity,
        unit_price: Money,  # locked at add time
        order: Order | None = None,
    ) -> None:
        self.product: Product | None = product
        self.order: Order | None = order
        self._quantity = quantity
        self._unit_price = unit_price

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(
        product: Product,
        order: Order,
        quantity: int,
        unit_price: Money,
    ) -> OrderLine:
        if product is None:
            raise ValidationError("Product must not be None")
        if order is None:
            raise ValidationError("Order must not be None")
        # Money enforces non-negativity
        if not isinstance(unit_price, Money):
            raise ValidationError("Unit price must be a non-negative Money amount")
        line = OrderLine(
            product=product,
            quantity=Quantity(quantity),
            unit_price=unit_price,
            order=order,
        )
        # The order may refuse the line; only link the product afterwards.
        order.add_line(line)
        product._link_line(line)
        return line

    # --- Accessors ------------------------------------------------------------

    @property
    def quantity(self) -> Quantity:
        return self._quantity

    @property
    def unit_price(self) -> Money:
        return self._unit_price

    @property
    def subtotal(self) -> Money:
        return self._unit_price * self._quantity.value

    def set_quantity(self, quantity: int) -> None:
        new_quantity = Quantity(quantity)
        if self.order is not None and self.order.is_frozen:
            raise InvalidStateError(
                f"Cannot change quantities of a {self.order.status.value} order"
            )
        self._quantity = new_quantity

    # --- Association management -----------------------------------------------

    def unlink(self) -> None:
        """Detach this line from its order and its product."""
        order, product = self.order, self.product
        self.order = None
        self.product = None
        if order is not None:
            order._discard_line(self)
        if product is not None:
            product._unlink_line(self)

    def _bind(self, order: Order) -> None:
        self.order = order
        if self.product is not None:
            self.product._link_line(self)

    def __repr__(self) -> str:
        name = self.product.name if self.product is not None else None
        return (
            f"OrderLine(product={name!r}, quantity={self._quantity.value}, "
            f"unit_price={self._unit_price})"
        )
