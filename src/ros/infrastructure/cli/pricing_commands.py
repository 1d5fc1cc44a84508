"""CLI commands for pricing services."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from ros.application.add_pricing_service import AddPricingServiceHandler
from ros.domain.exceptions import DomainException
from ros.domain.model.pricing import HolidayPricingService
from ros.infrastructure.bootstrap import pricing_service_repository

_DATETIME = click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d"])


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


@click.command("add-regular")
@click.option("--name", required=True, help="Service name.")
def pricing_add_regular(name: str) -> None:
    """Add a pricing service without discount."""
    handler = AddPricingServiceHandler(pricing_repo=pricing_service_repository())

    try:
        service = handler.add_regular(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Pricing service #{service.id} '{service.name}' added")


@click.command("add-holiday")
@click.option("--name", required=True, help="Service name.")
@click.option("--holiday", "holiday_name", required=True, help="Holiday name.")
@click.option("--start", required=True, type=_DATETIME, help="Window start (UTC).")
@click.option("--end", required=True, type=_DATETIME, help="Window end, inclusive (UTC).")
def pricing_add_holiday(name: str, holiday_name: str, start: datetime, end: datetime) -> None:
    """Add a holiday discount valid inside a time window."""
    handler = AddPricingServiceHandler(pricing_repo=pricing_service_repository())

    try:
        service = handler.add_holiday(name, holiday_name, _as_utc(start), _as_utc(end))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Pricing service #{service.id} '{service.name}' added "
        f"({service.discount_rate * 100:.0f}% off)"
    )


@click.command("list")
def pricing_list() -> None:
    """List pricing services."""
    services = pricing_service_repository().list_all()

    click.echo(f"{'ID':<6} {'Kind':<8} {'Name':<20} {'Rate':>6}  Window")
    click.echo("-" * 72)
    for s in services:
        window = ""
        if isinstance(s, HolidayPricingService):
            window = (
                f"{s.holiday_name}: {s.holiday_start:%Y-%m-%d %H:%M} .. "
                f"{s.holiday_end:%Y-%m-%d %H:%M}"
            )
        click.echo(f"{s.id:<6} {s.kind:<8} {s.name:<20} {s.discount_rate * 100:>5.0f}%  {window}")
