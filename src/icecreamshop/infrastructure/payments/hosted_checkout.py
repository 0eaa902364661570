"""Hosted checkout via the MercadoPago preferences API.

Creates a one-item "preference" for the amount due and hands back the
provider's JSON untouched; the customer then pays on the provider's
page (``init_point`` in the response).

Usage::

    gateway = HostedCheckoutGateway(access_token="APP_USR-...")
    preference = gateway.create_checkout(8)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from icecreamshop.domain.exceptions import CheckoutGatewayError
from icecreamshop.domain.service.payment_dispatcher import CheckoutGateway

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.mercadopago.com"
_PREFERENCES_ENDPOINT = "/checkout/preferences"
CHECKOUT_ITEM_TITLE = "icecreamshop-backend Payment"


class HostedCheckoutGateway(CheckoutGateway):

    def __init__(
        self,
        access_token: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def create_checkout(self, amount: int) -> dict[str, Any]:
        body = {
            "items": [
                {
                    "title": CHECKOUT_ITEM_TITLE,
                    "quantity": 1,
                    "unit_price": float(amount),
                }
            ]
        }
        headers = {"Authorization": f"Bearer {self._access_token}"}

        logger.debug("Creating checkout preference for %d", amount)
        try:
            with httpx.Client(
                base_url=self._api_base,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = client.post(_PREFERENCES_ENDPOINT, json=body, headers=headers)
                response.raise_for_status()
                preference = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("Checkout provider answered %d", exc.response.status_code)
            raise CheckoutGatewayError(_provider_message(exc.response)) from exc
        except httpx.HTTPError as exc:
            logger.warning("Checkout provider unreachable: %s", exc)
            raise CheckoutGatewayError(str(exc)) from exc
        except ValueError as exc:
            raise CheckoutGatewayError("Checkout provider returned invalid JSON") from exc

        if not isinstance(preference, dict):
            raise CheckoutGatewayError("Checkout provider returned an unexpected payload")
        logger.info("Checkout preference %s created", preference.get("id"))
        return preference


def _provider_message(response: httpx.Response) -> str:
    """The provider's own error message, when it sent one."""
    try:
        payload = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return response.text
