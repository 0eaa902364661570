"""Application services: Assign / Unassign Delivery Driver (admin)."""

from __future__ import annotations

import logging

from icecreamshop.domain.exceptions import DriverNotFoundError, OrderNotFoundError
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.repository.driver_repository import DeliveryDriverRepository
from icecreamshop.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class AssignDriverHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        driver_repo: DeliveryDriverRepository,
    ) -> None:
        self._order_repo = order_repo
        self._driver_repo = driver_repo

    def handle(self, order_id: int, driver_id: int) -> None:
        if not self._driver_repo.exists(driver_id):
            raise DriverNotFoundError()

        def apply(order: Order) -> None:
            # Re-checked under the lock: the driver may have just been removed.
            if not self._driver_repo.exists(driver_id):
                raise DriverNotFoundError()
            order.assign_driver(driver_id)

        if self._order_repo.mutate(order_id, apply) is None:
            raise OrderNotFoundError()

        logger.info("Driver %s assigned to order #%s", driver_id, order_id)


class UnassignDriverHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> None:

        def apply(order: Order) -> None:
            order.unassign_driver()

        if self._order_repo.mutate(order_id, apply) is None:
            raise OrderNotFoundError()

        logger.info("Driver unassigned from order #%s", order_id)
