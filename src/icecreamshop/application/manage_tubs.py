"""Application services: Add Tub and Remove Tub use cases.

Both run inside ``OrderRepository.mutate`` so "append tub + raise total"
and "drop tub + lower total" are atomic per order: two concurrent adds
can never lose one another's update.
"""

from __future__ import annotations

import logging

from icecreamshop.application.dto import TubDTO, to_tub_dto
from icecreamshop.application.ownership import assert_owner
from icecreamshop.domain.exceptions import OrderNotFoundError
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.model.pricing import PricingTable
from icecreamshop.domain.repository.flavor_repository import FlavorRepository
from icecreamshop.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AddTubHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        flavor_repo: FlavorRepository,
        pricing: PricingTable,
    ) -> None:
        self._order_repo = order_repo
        self._flavor_repo = flavor_repo
        self._pricing = pricing

    def handle(self, order_id: int, user_id: int, weight: int, flavors: list[str]) -> TubDTO:
        """Add a tub to one of the user's orders and return it with its new ID."""

        def apply(order: Order) -> None:
            assert_owner(order, user_id)
            order.add_tub(weight, flavors, self._flavor_repo, self._pricing)

        updated = self._order_repo.mutate(order_id, apply)
        if updated is None:
            raise OrderNotFoundError()

        # The aggregate appends, so the new tub is the last one.
        tub = updated.tubs[-1]
        logger.info(
            "Tub #%s (%dg, %s) added to order #%s; total now %d",
            tub.id, tub.weight, ",".join(tub.flavors), order_id, updated.total_cost,
        )
        return to_tub_dto(tub)


class RemoveTubHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: int, tub_id: int) -> None:

        def apply(order: Order) -> None:
            assert_owner(order, user_id)
            order.remove_tub(tub_id)

        updated = self._order_repo.mutate(order_id, apply)
        if updated is None:
            raise OrderNotFoundError()

        logger.info(
            "Tub #%s removed from order #%s; total now %d",
            tub_id, order_id, updated.total_cost,
        )
