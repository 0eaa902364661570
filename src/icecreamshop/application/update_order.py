"""Application service: Update Order use case.

Only the address and payment state can be patched.  The patch is
applied under the order's lock, after checking the caller still owns
the order, so ownership can never be reassigned through an update.
"""

from __future__ import annotations

import logging

from icecreamshop.application.dto import OrderDTO, to_order_dto
from icecreamshop.application.ownership import assert_owner
from icecreamshop.domain.exceptions import OrderNotFoundError
from icecreamshop.domain.model.order import Order, PaymentState
from icecreamshop.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        user_id: int,
        address: str,
        payment_state: str | None = None,
    ) -> OrderDTO:
        """Overwrite the address and, if given, the payment state.

        Args:
            order_id: The order to update.
            user_id: The acting user; must be the order's owner.
            address: New delivery address (required).
            payment_state: "pending" or "paid"; None leaves it unchanged.
        """
        state = PaymentState.parse(payment_state) if payment_state is not None else None

        def apply(order: Order) -> None:
            assert_owner(order, user_id)
            order.update_fields(address, state)

        updated = self._order_repo.mutate(order_id, apply)
        if updated is None:
            raise OrderNotFoundError()

        logger.info("Order #%s updated by user %s", order_id, user_id)
        return to_order_dto(updated)
