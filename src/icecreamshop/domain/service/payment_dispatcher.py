"""Domain service: Payment Dispatcher.

Routes a parsed PaymentRequest to the processor for its method and
returns that processor's confirmation.  Pure routing and validation:
the dispatcher holds no state between calls and never touches orders.

Card and wallet payments have no real processor behind them yet; they
succeed with a fixed confirmation token once their data validates.
Hosted checkout is delegated to a CheckoutGateway whose response (or
error) is passed through as-is.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from icecreamshop.domain.exceptions import UnsupportedPaymentTypeError
from icecreamshop.domain.model.payment import (
    CreditCard,
    DigitalWallet,
    PaymentRequest,
    PaymentType,
    PreferenceCheckout,
)

logger = logging.getLogger(__name__)

STUB_CONFIRMATION_TOKEN = "ABCDE123"


class CheckoutGateway(ABC):
    """External hosted-payments provider."""

    @abstractmethod
    def create_checkout(self, amount: int) -> dict[str, Any]:
        """Open a single-line-item checkout for ``amount``.

        Raises CheckoutGatewayError if the provider fails.
        """


@dataclass(frozen=True)
class PaymentConfirmation:
    payment_type: PaymentType
    amount: int
    payload: str | dict[str, Any]


class PaymentDispatcher:

    def __init__(self, checkout_gateway: CheckoutGateway) -> None:
        self._checkout_gateway = checkout_gateway

    def process(self, request: PaymentRequest, amount_due: int) -> PaymentConfirmation:
        method = request.method

        if request.payment_type == PaymentType.CREDIT_CARD and isinstance(method, CreditCard):
            method.validate(amount_due)
            payload: str | dict[str, Any] = STUB_CONFIRMATION_TOKEN
        elif request.payment_type == PaymentType.DIGITAL_WALLET and isinstance(method, DigitalWallet):
            method.validate(amount_due)
            payload = STUB_CONFIRMATION_TOKEN
        elif request.payment_type == PaymentType.PREFERENCE_CHECKOUT and isinstance(
            method, PreferenceCheckout
        ):
            method.validate(amount_due)
            payload = self._checkout_gateway.create_checkout(amount_due)
        else:
            raise UnsupportedPaymentTypeError()

        logger.info("Processed %s payment of %d", request.payment_type.value, amount_due)
        return PaymentConfirmation(
            payment_type=request.payment_type,
            amount=amount_due,
            payload=payload,
        )
