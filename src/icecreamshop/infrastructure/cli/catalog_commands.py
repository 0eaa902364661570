"""CLI commands for reference data: flavors, users and delivery drivers."""

from __future__ import annotations

import click

from icecreamshop.application.manage_catalog import (
    AddFlavorHandler,
    AddUserHandler,
    ListFlavorsHandler,
    ShowFlavorHandler,
)
from icecreamshop.application.manage_drivers import (
    AddDriverHandler,
    RemoveDriverHandler,
    ShowDriverHandler,
    UpdateDriverHandler,
)
from icecreamshop.domain.exceptions import DomainException
from icecreamshop.infrastructure.bootstrap import (
    driver_repository,
    flavor_repository,
    order_repository,
    user_repository,
)


# --- Flavors --------------------------------------------------------------------


@click.command("list")
@click.option("--category", default=None, help="Only flavors of this category.")
def flavor_list(category: str | None) -> None:
    """List the flavor catalog."""
    flavors = ListFlavorsHandler(flavor_repo=flavor_repository()).handle(category)

    if not flavors:
        click.echo("No flavors found.")
        return

    click.echo(f"{'ID':<6} {'Name':<22} {'Category':<20}")
    click.echo("-" * 50)
    for f in flavors:
        click.echo(f"{f.id:<6} {f.name:<22} {f.category:<20}")


@click.command("add")
@click.option("--id", "flavor_id", required=True, help="Short flavor ID, e.g. 'ddl'.")
@click.option("--name", required=True, help="Flavor name.")
@click.option("--category", required=True, help="Flavor category.")
def flavor_add(flavor_id: str, name: str, category: str) -> None:
    """Add a flavor to the catalog."""
    handler = AddFlavorHandler(flavor_repo=flavor_repository())

    try:
        flavor = handler.handle(flavor_id, name, category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Flavor '{flavor.id}' ({flavor.name}) added.")


@click.command("show")
@click.option("--id", "flavor_id", required=True, help="Flavor ID.")
def flavor_show(flavor_id: str) -> None:
    """Show one flavor."""
    handler = ShowFlavorHandler(flavor_repo=flavor_repository())

    try:
        flavor = handler.handle(flavor_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{flavor.id}: {flavor.name} ({flavor.category})")


# --- Users ----------------------------------------------------------------------


@click.command("list")
def user_list() -> None:
    """List users."""
    users = user_repository().list_all()

    click.echo(f"{'ID':<6} {'Email':<28} {'Name'}")
    click.echo("-" * 50)
    for u in users:
        click.echo(f"{u.id:<6} {u.email:<28} {u.name} {u.last_name}")


@click.command("add")
@click.option("--email", required=True)
@click.option("--name", required=True)
@click.option("--last-name", required=True)
def user_add(email: str, name: str, last_name: str) -> None:
    """Register a user."""
    handler = AddUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(email, name, last_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} <{user.email}> created.")


# --- Delivery drivers -----------------------------------------------------------


@click.command("list")
def driver_list() -> None:
    """List delivery drivers."""
    drivers = driver_repository().list_all()

    if not drivers:
        click.echo("No delivery drivers found.")
        return

    click.echo(f"{'User':<6} {'Cuil':<12} {'Age':>4}  Vehicles")
    click.echo("-" * 50)
    for d in drivers:
        click.echo(f"{d.user_id:<6} {d.cuil:<12} {d.age:>4}  {','.join(d.vehicles)}")


@click.command("add")
@click.option("--user", "user_id", required=True, type=int, help="User ID to promote.")
@click.option("--cuil", required=True)
@click.option("--age", required=True, type=int)
@click.option("--vehicles", required=True, help="Vehicle IDs as 'AB123CD,XYZ987'.")
def driver_add(user_id: int, cuil: str, age: int, vehicles: str) -> None:
    """Register a user as delivery driver."""
    handler = AddDriverHandler(driver_repo=driver_repository(), user_repo=user_repository())
    vehicle_ids = _parse_vehicles(vehicles)

    try:
        handler.handle(user_id, cuil, age, vehicle_ids)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user_id} is now a delivery driver.")


@click.command("remove")
@click.option("--user", "user_id", required=True, type=int, help="Driver (user) ID.")
def driver_remove(user_id: int) -> None:
    """Remove a delivery driver and unassign it from its orders."""
    handler = RemoveDriverHandler(driver_repo=driver_repository(), order_repo=order_repository())

    try:
        cleared = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Driver {user_id} removed ({cleared} order(s) unassigned).")


@click.command("show")
@click.option("--user", "user_id", required=True, type=int, help="Driver (user) ID.")
def driver_show(user_id: int) -> None:
    """Show one delivery driver."""
    handler = ShowDriverHandler(driver_repo=driver_repository())

    try:
        d = handler.handle(user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Driver {d.user_id}  cuil={d.cuil}  age={d.age}  vehicles={','.join(d.vehicles)}")


@click.command("update")
@click.option("--user", "user_id", required=True, type=int, help="Driver (user) ID.")
@click.option("--cuil", required=True)
@click.option("--age", required=True, type=int)
@click.option("--vehicles", required=True, help="Vehicle IDs as 'AB123CD,XYZ987'.")
def driver_update(user_id: int, cuil: str, age: int, vehicles: str) -> None:
    """Replace a delivery driver's cuil, age and vehicles."""
    handler = UpdateDriverHandler(driver_repo=driver_repository())

    try:
        handler.handle(user_id, cuil, age, _parse_vehicles(vehicles))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Driver {user_id} updated.")


def _parse_vehicles(raw: str) -> list[str]:
    return [v.strip() for v in raw.split(",") if v.strip()]
