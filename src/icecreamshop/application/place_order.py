"""Application service: Place Order use case.

Checks the acting user exists, lets the Order aggregate validate the
address, then persists the new (empty, pending) order.
"""

from __future__ import annotations

import logging

from icecreamshop.application.dto import OrderDTO, to_order_dto
from icecreamshop.domain.exceptions import UserNotFoundError
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.repository.order_repository import OrderRepository
from icecreamshop.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        user_repo: UserRepository,
    ) -> None:
        self._order_repo = order_repo
        self._user_repo = user_repo

    def handle(self, user_id: int, address: str) -> OrderDTO:
        if self._user_repo.get_by_id(user_id) is None:
            raise UserNotFoundError()

        order = Order.create(user_id=user_id, address=address)
        self._order_repo.save(order)

        logger.info("Order #%s placed by user %s", order.id, user_id)
        return to_order_dto(order)
