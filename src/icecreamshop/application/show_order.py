"""Application services: order queries (single order, listings, tubs, driver)."""

from __future__ import annotations

from icecreamshop.application.dto import OrderDTO, TubDTO, to_order_dto, to_tub_dto
from icecreamshop.application.ownership import load_order
from icecreamshop.domain.exceptions import DriverNotFoundError
from icecreamshop.domain.model.people import DeliveryDriver
from icecreamshop.domain.repository.driver_repository import DeliveryDriverRepository
from icecreamshop.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: int | None = None) -> OrderDTO:
        """Show one order.  With ``user_id`` the lookup is owner-scoped."""
        return to_order_dto(load_order(self._order_repo, order_id, user_id))


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, user_id: int | None = None) -> list[OrderDTO]:
        """List a user's orders, or every order when ``user_id`` is None."""
        if user_id is None:
            orders = self._order_repo.list_all()
        else:
            orders = self._order_repo.list_by_user(user_id)
        return [to_order_dto(order) for order in orders]


class ListTubsHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int, user_id: int) -> list[TubDTO]:
        order = load_order(self._order_repo, order_id, user_id)
        return [to_tub_dto(tub) for tub in order.tubs]


class ShowOrderDriverHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        driver_repo: DeliveryDriverRepository,
    ) -> None:
        self._order_repo = order_repo
        self._driver_repo = driver_repo

    def handle(self, order_id: int, user_id: int) -> DeliveryDriver | None:
        """The driver delivering one of the user's orders, or None if unassigned."""
        order = load_order(self._order_repo, order_id, user_id)
        if not order.has_driver:
            return None

        driver = self._driver_repo.get_by_id(order.delivery_driver_id)
        if driver is None:
            raise DriverNotFoundError()
        return driver
