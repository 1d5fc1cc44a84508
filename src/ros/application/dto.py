"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from ros.domain.model.order import Order


@dataclass(frozen=True)
class CartItemSpec:
    """Input: what the customer asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    product_id: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    subtotal: str


@dataclass(frozen=True)
class FeedbackDTO:
    description: str
    submitted_at: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int | None
    customer_name: str
    table_number: int | None
    status: str
    payment_status: str
    pricing_service: str
    order_time: str
    notes: str | None
    lines: list[OrderLineDTO]
    total_quantity: int
    total_amount: str
    service_fee: str
    discount_rate: str  # e.g. "10%"
    final_price: str
    feedbacks: list[FeedbackDTO]


def order_to_dto(order: Order) -> OrderDTO:
    customer = order.customer
    service = order.pricing_service
    return OrderDTO(
        id=order.id,
        customer_name=customer.full_name if customer is not None else "",
        table_number=order.table_number,
        status=order.status.value,
        payment_status=order.payment_status.value,
        pricing_service=service.name if service is not None else "",
        order_time=(
            order.order_time.strftime("%Y-%m-%d %H:%M UTC") if order.order_time else ""
        ),
        notes=order.notes,
        lines=[
            OrderLineDTO(
                product_id=line.product.id,
                product_name=line.product.name,
                quantity=line.quantity.value,
                unit_price=str(line.unit_price),
                subtotal=str(line.subtotal),
            )
            for line in order.lines
        ],
        total_quantity=order.total_quantity,
        total_amount=str(order.total_amount),
        service_fee=str(order.service_fee),
        discount_rate=f"{order.applied_discount_rate * 100:.0f}%",
        final_price=str(order.final_price),
        feedbacks=[
            FeedbackDTO(
                description=feedback.description,
                submitted_at=feedback.submitted_at.strftime("%Y-%m-%d %H:%M UTC"),
            )
            for feedback in order.feedbacks
        ],
    )
