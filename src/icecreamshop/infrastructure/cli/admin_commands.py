"""CLI commands for shop staff: every order, and driver assignment."""

from __future__ import annotations

import click

from icecreamshop.application.assign_driver import AssignDriverHandler, UnassignDriverHandler
from icecreamshop.application.show_order import ListOrdersHandler, ShowOrderHandler
from icecreamshop.domain.exceptions import DomainException
from icecreamshop.infrastructure.bootstrap import driver_repository, order_repository
from icecreamshop.infrastructure.cli.order_commands import display_order, display_order_rows


@click.command("list")
def orders_list() -> None:
    """List all orders from all users."""
    handler = ListOrdersHandler(order_repo=order_repository())
    display_order_rows(handler.handle())


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the order as JSON.")
def orders_show(order_id: int, as_json: bool) -> None:
    """Show any order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto, as_json)


@click.command("assign-driver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--driver", "driver_id", required=True, type=int, help="Driver (user) ID.")
def orders_assign_driver(order_id: int, driver_id: int) -> None:
    """Assign a delivery driver to an order."""
    handler = AssignDriverHandler(order_repo=order_repository(), driver_repo=driver_repository())

    try:
        handler.handle(order_id, driver_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Driver {driver_id} assigned to order #{order_id}.")


@click.command("unassign-driver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def orders_unassign_driver(order_id: int) -> None:
    """Remove the delivery driver from an order."""
    handler = UnassignDriverHandler(order_repo=order_repository())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} has no driver now.")
