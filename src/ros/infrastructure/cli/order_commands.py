"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from ros.application.cancel_order import CancelOrderHandler
from ros.application.delete_order import DeleteOrderHandler
from ros.application.dto import CartItemSpec, OrderDTO
from ros.application.leave_feedback import LeaveFeedbackHandler
from ros.application.list_orders import ListOrdersHandler
from ros.application.pay_order import PayOrderHandler
from ros.application.place_order import PlaceOrderHandler
from ros.application.reactivate_order import ReactivateOrderHandler
from ros.application.show_order import ShowOrderHandler
from ros.application.update_order_status import UpdateOrderStatusHandler
from ros.domain.exceptions import DomainException
from ros.domain.model.order import OrderStatus, PaymentStatus
from ros.infrastructure.bootstrap import (
    cart_handler,
    customer_repository,
    order_repository,
    product_repository,
)


def _parse_items(raw: str) -> list[CartItemSpec]:
    """Parse 'Pierogi:3,Lemonade:2' into CartItemSpec list."""
    specs: list[CartItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(CartItemSpec(product_name=name.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Table:    {dto.table_number}")
    click.echo(f"Placed:   {dto.order_time}")
    click.echo(f"Pricing:  {dto.pricing_service}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()

    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*47}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<20} {line.quantity:>5} {line.unit_price:>10} {line.subtotal:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Products':<27} {dto.total_amount:>20}")
    click.echo(f"  {'Service fee (10%)':<27} {dto.service_fee:>20}")
    if dto.discount_rate != "0%":
        click.echo(f"  {'Discount':<27} {dto.discount_rate:>20}")
    click.echo(f"  {'Order Total':<27} {dto.final_price:>20}")

    for feedback in dto.feedbacks:
        click.echo()
        click.echo(f"Feedback ({feedback.submitted_at}): {feedback.description}")


@click.command("place")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--table", "table_number", required=True, type=int, help="Table number.")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--notes", default=None, help="Special instructions.")
@click.option("--pricing", "pricing_service_id", default=None, help="Pricing service ID.")
def order_place(
    customer_id: str,
    table_number: int,
    items: str,
    notes: str | None,
    pricing_service_id: str | None,
) -> None:
    """Place a new order."""
    specs = _parse_items(items)

    handler = PlaceOrderHandler(
        cart_handler=cart_handler(),
        product_repo=product_repository(),
    )

    try:
        dto = handler.handle(
            customer_id=customer_id,
            table_number=table_number,
            item_specs=specs,
            notes=notes,
            pricing_service_id=pricing_service_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} placed.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List every order (employee board)."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
    )
    dtos = handler.all()

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(
        f"{'ID':<6} {'Table':>5} {'Customer':<20} {'Status':<12} {'Payment':<8} {'Total':>10}"
    )
    click.echo("-" * 66)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.table_number:>5} {dto.customer_name:<20} "
            f"{dto.status:<12} {dto.payment_status:<8} {dto.final_price:>10}"
        )


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel a new, unpaid order."""
    handler = CancelOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("reactivate")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to reactivate.")
def order_reactivate(order_id: int) -> None:
    """Bring a cancelled order back to NEW."""
    handler = ReactivateOrderHandler(order_repo=order_repository())

    try:
        changed = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if changed:
        click.echo(f"Order #{order_id} reactivated.")
    else:
        click.echo(f"Order #{order_id} was not cancelled; nothing to do.")


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to pay.")
def order_pay(order_id: int) -> None:
    """Mark an order as paid (completes a served order)."""
    handler = PayOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, PaymentStatus.PAID)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} paid (status={dto.status}).")


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option(
    "--status",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="New order status.",
)
@click.option(
    "--payment",
    "payment_status",
    required=True,
    type=click.Choice([p.value for p in PaymentStatus], case_sensitive=False),
    help="New payment status.",
)
def order_status(order_id: int, status: str, payment_status: str) -> None:
    """Update status and payment of an order (employee action)."""
    handler = UpdateOrderStatusHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, status, payment_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is {dto.status}/{dto.payment_status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
def order_delete(order_id: int) -> None:
    """Permanently delete a new or cancelled order."""
    handler = DeleteOrderHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("feedback")
@click.option("--id", "order_id", required=True, type=int, help="Completed order ID.")
@click.option("--customer", "customer_id", required=True, help="Customer ID.")
@click.option("--text", "description", required=True, help="Feedback text.")
def order_feedback(order_id: int, customer_id: str, description: str) -> None:
    """Leave feedback on a completed order."""
    handler = LeaveFeedbackHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, customer_id, description)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Thank you! Feedback for order #{order_id} recorded.")
