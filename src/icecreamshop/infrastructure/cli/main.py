import click

from icecreamshop.infrastructure.bootstrap import settings
from icecreamshop.infrastructure.cli.admin_commands import (
    orders_assign_driver,
    orders_list,
    orders_show,
    orders_unassign_driver,
)
from icecreamshop.infrastructure.cli.catalog_commands import (
    driver_add,
    driver_list,
    driver_remove,
    driver_show,
    driver_update,
    flavor_add,
    flavor_list,
    flavor_show,
    user_add,
    user_list,
)
from icecreamshop.infrastructure.cli.order_commands import (
    order_add_tub,
    order_create,
    order_driver,
    order_list,
    order_pay,
    order_remove_tub,
    order_show,
    order_tubs,
    order_update,
)
from icecreamshop.infrastructure.config import ConfigurationError
from icecreamshop.infrastructure.logging_config import configure_logging


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Ice-cream shop — orders, tubs, drivers and payments"""
    try:
        level = "DEBUG" if verbose else settings().log_level
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(level)
    ctx.ensure_object(dict)


@cli.group("my-orders")
@click.option(
    "--user",
    "user_id",
    required=True,
    type=int,
    envvar="ICECREAM_USER_ID",
    help="Acting user ID (or ICECREAM_USER_ID).",
)
@click.pass_context
def my_orders(ctx: click.Context, user_id: int) -> None:
    """Manage your own orders."""
    ctx.find_root().obj["user_id"] = user_id


@cli.group()
def orders() -> None:
    """Manage all orders (staff)."""


@cli.group()
def flavor() -> None:
    """Manage the flavor catalog."""


@cli.group()
def driver() -> None:
    """Manage delivery drivers."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
my_orders.add_command(order_add_tub)
my_orders.add_command(order_create)
my_orders.add_command(order_driver)
my_orders.add_command(order_list)
my_orders.add_command(order_pay)
my_orders.add_command(order_remove_tub)
my_orders.add_command(order_show)
my_orders.add_command(order_tubs)
my_orders.add_command(order_update)
orders.add_command(orders_assign_driver)
orders.add_command(orders_list)
orders.add_command(orders_show)
orders.add_command(orders_unassign_driver)
flavor.add_command(flavor_add)
flavor.add_command(flavor_list)
flavor.add_command(flavor_show)
driver.add_command(driver_add)
driver.add_command(driver_list)
driver.add_command(driver_remove)
driver.add_command(driver_show)
driver.add_command(driver_update)
user.add_command(user_add)
user.add_command(user_list)
