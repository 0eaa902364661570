"""Application services: register, look up, update and remove delivery drivers.

Removing a driver also clears it from every order it was assigned to,
so orders never point at a driver that no longer exists.
"""

from __future__ import annotations

import logging

from icecreamshop.domain.exceptions import (
    AlreadyDriverError,
    DriverNotFoundError,
    UserNotFoundError,
)
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.model.people import DeliveryDriver
from icecreamshop.domain.repository.driver_repository import DeliveryDriverRepository
from icecreamshop.domain.repository.order_repository import OrderRepository
from icecreamshop.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AddDriverHandler:

    def __init__(
        self,
        driver_repo: DeliveryDriverRepository,
        user_repo: UserRepository,
    ) -> None:
        self._driver_repo = driver_repo
        self._user_repo = user_repo

    def handle(self, user_id: int, cuil: str, age: int, vehicles: list[str]) -> DeliveryDriver:
        driver = DeliveryDriver.create(user_id=user_id, cuil=cuil, age=age, vehicles=vehicles)

        if self._user_repo.get_by_id(user_id) is None:
            raise UserNotFoundError()
        if self._driver_repo.exists(user_id):
            raise AlreadyDriverError()

        self._driver_repo.save(driver)
        logger.info("User %s registered as delivery driver", user_id)
        return driver


class RemoveDriverHandler:

    def __init__(
        self,
        driver_repo: DeliveryDriverRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._driver_repo = driver_repo
        self._order_repo = order_repo

    def handle(self, user_id: int) -> int:
        """Delete the driver and unassign it everywhere.

        Returns how many orders were unassigned.
        """
        if not self._driver_repo.delete(user_id):
            raise DriverNotFoundError()

        def apply(order: Order) -> None:
            # Re-checked under the lock: the order may have been reassigned.
            if order.delivery_driver_id == user_id:
                order.unassign_driver()

        cleared = 0
        for order in self._order_repo.list_by_driver(user_id):
            if self._order_repo.mutate(order.id, apply) is not None:  # type: ignore[arg-type]
                cleared += 1

        logger.info("Driver %s removed; unassigned from %d order(s)", user_id, cleared)
        return cleared


class ShowDriverHandler:

    def __init__(self, driver_repo: DeliveryDriverRepository) -> None:
        self._driver_repo = driver_repo

    def handle(self, user_id: int) -> DeliveryDriver:
        driver = self._driver_repo.get_by_id(user_id)
        if driver is None:
            raise DriverNotFoundError()
        return driver


class UpdateDriverHandler:

    def __init__(self, driver_repo: DeliveryDriverRepository) -> None:
        self._driver_repo = driver_repo

    def handle(self, user_id: int, cuil: str, age: int, vehicles: list[str]) -> DeliveryDriver:
        """Replace a driver's cuil, age and vehicles; the user id never changes."""
        driver = DeliveryDriver.create(user_id=user_id, cuil=cuil, age=age, vehicles=vehicles)
        if not self._driver_repo.exists(user_id):
            raise DriverNotFoundError()

        self._driver_repo.save(driver)
        logger.info("Delivery driver %s updated", user_id)
        return driver
