"""Application service: Pay Order use case.

Three steps:
  1. Read a snapshot of the owned order to learn the amount due.
  2. Dispatch the payment without holding the order's lock.  This may
     be a slow call to a hosted checkout provider.
  3. Take the order's lock and flip it to paid, but only if it is
     still pending and its total is still the amount charged.

A failed payment raises before step 3, and a changed or already paid
order raises in step 3.  Either way the order stays as it was.
"""

from __future__ import annotations

import logging
from typing import Any

from icecreamshop.application.ownership import load_order
from icecreamshop.domain.exceptions import (
    DomainException,
    OrderAlreadyPaidError,
    OrderChangedDuringPaymentError,
    OrderNotFoundError,
)
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.model.payment import PaymentRequest
from icecreamshop.domain.repository.order_repository import OrderRepository
from icecreamshop.domain.service.payment_dispatcher import (
    PaymentConfirmation,
    PaymentDispatcher,
)

logger = logging.getLogger(__name__)


class PayOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        dispatcher: PaymentDispatcher,
    ) -> None:
        self._order_repo = order_repo
        self._dispatcher = dispatcher

    def handle(self, order_id: int, user_id: int, payment_data: Any) -> PaymentConfirmation:
        order = load_order(self._order_repo, order_id, user_id)
        if order.is_paid:
            raise OrderAlreadyPaidError()

        request = PaymentRequest.from_dict(payment_data)
        try:
            confirmation = self._dispatcher.process(request, order.total_cost)
        except DomainException:
            logger.warning("Payment for order #%s failed", order_id, exc_info=True)
            raise

        charged = order.total_cost

        def apply(current: Order) -> None:
            if current.is_paid:
                logger.warning(
                    "Order #%s was paid by another request; %d charged via %s not recorded",
                    order_id, charged, request.payment_type.value,
                )
                raise OrderAlreadyPaidError()
            if current.total_cost != charged:
                logger.warning(
                    "Order #%s total changed during payment (%d charged, %d now)",
                    order_id, charged, current.total_cost,
                )
                raise OrderChangedDuringPaymentError()
            current.mark_paid()

        if self._order_repo.mutate(order_id, apply) is None:
            raise OrderNotFoundError()

        logger.info("Order #%s paid via %s", order_id, request.payment_type.value)
        return confirmation
