"""CLI commands for the acting customer's own orders (``my-orders``)."""

from __future__ import annotations

import json

import click

from icecreamshop.application.dto import OrderDTO, TubDTO
from icecreamshop.application.manage_tubs import AddTubHandler, RemoveTubHandler
from icecreamshop.application.pay_order import PayOrderHandler
from icecreamshop.application.place_order import PlaceOrderHandler
from icecreamshop.application.show_order import (
    ListOrdersHandler,
    ListTubsHandler,
    ShowOrderDriverHandler,
    ShowOrderHandler,
)
from icecreamshop.application.update_order import UpdateOrderHandler
from icecreamshop.domain.exceptions import DomainException
from icecreamshop.infrastructure.bootstrap import (
    driver_repository,
    flavor_repository,
    order_repository,
    payment_dispatcher,
    pricing_table,
    user_repository,
)


def _acting_user() -> int:
    return click.get_current_context().find_root().obj["user_id"]


def _parse_flavors(raw: str) -> list[str]:
    """Parse 'ddl,frt' into ['ddl', 'frt']."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def display_order(dto: OrderDTO, as_json: bool = False) -> None:
    """Shared formatting for displaying an order."""
    if as_json:
        click.echo(json.dumps(dto.to_dict(), indent=2))
        return
    driver = dto.delivery_driver_id or "unassigned"
    click.echo(f"Order #{dto.id}  (state={dto.payment_state})")
    click.echo(f"Address: {dto.address}")
    click.echo(f"User:    {dto.user_id}    Driver: {driver}")
    click.echo()
    display_tubs(dto.tubs)
    click.echo(f"  {'Order Total':<35} {dto.total_cost:>10}")


def display_tubs(tubs: list[TubDTO]) -> None:
    click.echo(f"  {'Tub':<6} {'Weight':>7} {'Flavors':<22} {'Price':>10}")
    click.echo(f"  {'-'*46}")
    for tub in tubs:
        click.echo(f"  {tub.id:<6} {tub.weight:>7} {','.join(tub.flavors):<22} {tub.price:>10}")
    click.echo(f"  {'-'*46}")


def display_order_rows(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return
    click.echo(f"{'ID':<6} {'User':>5} {'State':<8} {'Tubs':>5} {'Total':>7} {'Driver':>7}  Address")
    click.echo("-" * 70)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.user_id:>5} {o.payment_state:<8} {len(o.tubs):>5} "
            f"{o.total_cost:>7} {o.delivery_driver_id:>7}  {o.address}"
        )


@click.command("create")
@click.option("--address", required=True, help="Delivery address.")
def order_create(address: str) -> None:
    """Place a new, empty order."""
    handler = PlaceOrderHandler(order_repo=order_repository(), user_repo=user_repository())

    try:
        dto = handler.handle(user_id=_acting_user(), address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (state={dto.payment_state}, total={dto.total_cost})")


@click.command("list")
def order_list() -> None:
    """List your orders."""
    handler = ListOrdersHandler(order_repo=order_repository())
    display_order_rows(handler.handle(user_id=_acting_user()))


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the order as JSON.")
def order_show(order_id: int, as_json: bool) -> None:
    """Show details of one of your orders."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, user_id=_acting_user())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_order(dto, as_json)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--address", required=True, help="New delivery address.")
@click.option(
    "--state",
    "payment_state",
    type=click.Choice(["pending", "paid"]),
    default=None,
    help="New payment state.",
)
def order_update(order_id: int, address: str, payment_state: str | None) -> None:
    """Update the address (and optionally payment state) of an order."""
    handler = UpdateOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id, _acting_user(), address, payment_state)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} updated.")


@click.command("tubs")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_tubs(order_id: int) -> None:
    """List the tubs of an order."""
    handler = ListTubsHandler(order_repo=order_repository())

    try:
        tubs = handler.handle(order_id, _acting_user())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not tubs:
        click.echo("No tubs in this order.")
        return
    display_tubs(tubs)


@click.command("add-tub")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--weight", required=True, type=int, help="Tub weight in grams.")
@click.option("--flavors", required=True, help="Flavor IDs as 'ddl,frt' (1 to 4).")
def order_add_tub(order_id: int, weight: int, flavors: str) -> None:
    """Add an ice-cream tub to an order."""
    handler = AddTubHandler(
        order_repo=order_repository(),
        flavor_repo=flavor_repository(),
        pricing=pricing_table(),
    )

    try:
        tub = handler.handle(order_id, _acting_user(), weight, _parse_flavors(flavors))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Tub #{tub.id} ({tub.weight}g, {','.join(tub.flavors)}) added at {tub.price}")


@click.command("remove-tub")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--tub", "tub_id", required=True, type=int, help="Tub ID to remove.")
def order_remove_tub(order_id: int, tub_id: int) -> None:
    """Remove an ice-cream tub from an order."""
    handler = RemoveTubHandler(order_repo=order_repository())

    try:
        handler.handle(order_id, _acting_user(), tub_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Tub #{tub_id} removed from order #{order_id}.")


@click.command("pay")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to pay.")
@click.option("--payment", required=True, help="Payment request as JSON.")
def order_pay(order_id: int, payment: str) -> None:
    """Pay an order.

    \b
    Examples of --payment:
      '{"payment_type": "digitalWallet", "digital_wallet": {"wallet_id": "w1"}}'
      '{"payment_type": "preferenceMP", "preference_mp": {}}'
    """
    try:
        payment_data = json.loads(payment)
    except json.JSONDecodeError:
        raise click.BadParameter("Invalid json format.", param_hint="--payment")

    handler = PayOrderHandler(order_repo=order_repository(), dispatcher=payment_dispatcher())

    try:
        confirmation = handler.handle(order_id, _acting_user(), payment_data)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} paid ({confirmation.payment_type.value}).")
    if isinstance(confirmation.payload, dict):
        click.echo(json.dumps(confirmation.payload, indent=2))
    else:
        click.echo(f"Confirmation: {confirmation.payload}")


@click.command("driver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_driver(order_id: int) -> None:
    """Show who is delivering one of your orders."""
    handler = ShowOrderDriverHandler(order_repo=order_repository(), driver_repo=driver_repository())

    try:
        driver = handler.handle(order_id, _acting_user())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if driver is None:
        click.echo(f"Order #{order_id} has no delivery driver yet.")
        return
    click.echo(f"Driver {driver.user_id}  (vehicles: {','.join(driver.vehicles)})")
