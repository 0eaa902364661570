"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Field names follow
the JSON the shop has always served.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from icecreamshop.domain.model.flavor import Flavor
from icecreamshop.domain.model.order import IceCreamTub, Order


@dataclass(frozen=True)
class TubDTO:
    id: int
    weight: int
    flavors: list[str]
    order_id: int
    price: int


@dataclass(frozen=True)
class OrderDTO:
    id: int
    address: str
    user_id: int
    delivery_driver_id: int
    payment_state: str
    total_cost: int
    tubs: list[TubDTO]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FlavorDTO:
    id: str
    name: str
    category: str


# --- Mapping ------------------------------------------------------------------


def to_tub_dto(tub: IceCreamTub) -> TubDTO:
    return TubDTO(
        id=tub.id,  # type: ignore[arg-type]
        weight=tub.weight,
        flavors=list(tub.flavors),
        order_id=tub.order_id,  # type: ignore[arg-type]
        price=tub.price,
    )


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        address=order.address,
        user_id=order.user_id,
        delivery_driver_id=order.delivery_driver_id,
        payment_state=order.payment_state.value,
        total_cost=order.total_cost,
        tubs=[to_tub_dto(tub) for tub in order.tubs],
    )


def to_flavor_dto(flavor: Flavor) -> FlavorDTO:
    return FlavorDTO(id=flavor.id, name=flavor.name, category=flavor.category)
