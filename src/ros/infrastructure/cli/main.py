import click

from ros.infrastructure.bootstrap import settings
from ros.infrastructure.cli.customer_commands import (
    customer_add,
    customer_list,
    customer_orders,
)
from ros.infrastructure.cli.order_commands import (
    order_cancel,
    order_delete,
    order_feedback,
    order_list,
    order_pay,
    order_place,
    order_reactivate,
    order_show,
    order_status,
)
from ros.infrastructure.cli.pricing_commands import (
    pricing_add_holiday,
    pricing_add_regular,
    pricing_list,
)
from ros.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_show,
    product_update,
)
from ros.infrastructure.logging_config import setup_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """ROS — Restaurant Ordering System"""
    config = settings()
    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)


@cli.group()
def customer() -> None:
    """Manage customers."""


@cli.group()
def product() -> None:
    """Manage the menu."""


@cli.group()
def pricing() -> None:
    """Manage pricing services."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


# Register subcommands
customer.add_command(customer_add)
customer.add_command(customer_list)
customer.add_command(customer_orders)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
pricing.add_command(pricing_add_regular)
pricing.add_command(pricing_add_holiday)
pricing.add_command(pricing_list)
order.add_command(order_cancel)
order.add_command(order_delete)
order.add_command(order_feedback)
order.add_command(order_list)
order.add_command(order_pay)
order.add_command(order_place)
order.add_command(order_reactivate)
order.add_command(order_show)
order.add_command(order_status)
