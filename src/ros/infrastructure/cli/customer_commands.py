"""CLI commands for the Customer aggregate."""

from __future__ import annotations

import click

from ros.application.add_customer import AddCustomerHandler
from ros.application.list_orders import ListOrdersHandler
from ros.domain.exceptions import DomainException
from ros.infrastructure.bootstrap import customer_repository, order_repository


@click.command("add")
@click.option("--name", required=True, help="First name.")
@click.option("--surname", default=None, help="Surname (optional).")
@click.option("--email", required=True, help="Email address.")
@click.option("--phone", required=True, help="Phone number, e.g. +48123456789.")
@click.option("--country", required=True, help="Country.")
@click.option("--postal-code", "postal_code", required=True, help="Postal code.")
@click.option("--city", default=None, help="City (optional).")
@click.option("--street", default=None, help="Street (optional).")
@click.option("--house", "house_number", default=None, help="House number (optional).")
def customer_add(
    name: str,
    surname: str | None,
    email: str,
    phone: str,
    country: str,
    postal_code: str,
    city: str | None,
    street: str | None,
    house_number: str | None,
) -> None:
    """Register a new customer."""
    handler = AddCustomerHandler(customer_repo=customer_repository())

    try:
        customer = handler.handle(
            name=name,
            email=email,
            phone=phone,
            country=country,
            postal_code=postal_code,
            surname=surname,
            city=city,
            street=street,
            house_number=house_number,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.full_name}' registered")


@click.command("list")
def customer_list() -> None:
    """List registered customers."""
    customers = customer_repository().list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<28} {'Phone':<16} Address")
    click.echo("-" * 100)
    for c in customers:
        click.echo(f"{c.id:<6} {c.full_name:<24} {c.email:<28} {c.phone:<16} {c.address}")


@click.command("orders")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--all", "include_canceled", is_flag=True, default=False, help="Include canceled orders.")
def customer_orders(customer_id: str, include_canceled: bool) -> None:
    """List a customer's orders, newest first."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        customer_repo=customer_repository(),
    )

    try:
        dtos = handler.for_customer(customer_id, include_canceled=include_canceled)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Time':<22} {'Status':<12} {'Payment':<8} {'Total':>10}")
    click.echo("-" * 62)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.order_time:<22} {dto.status:<12} {dto.payment_status:<8} {dto.final_price:>10}"
        )
