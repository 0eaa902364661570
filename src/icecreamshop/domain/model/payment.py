"""Payment requests — a tagged union over the supported payment methods.

A request names its method in ``payment_type`` and carries exactly one
matching payload.  ``PaymentRequest.from_dict`` rejects anything else at
parse time, so the dispatcher only ever sees well-formed requests.

Wire format::

    {
        "payment_type": "creditCard" | "digitalWallet" | "preferenceMP",
        "credit_card": {...},
        "digital_wallet": {...},
        "preference_mp": {}
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from icecreamshop.domain.exceptions import (
    InvalidAmountError,
    InvalidCardNumberError,
    InvalidCVVError,
    InvalidExpirationMonthError,
    InvalidExpirationYearError,
    InvalidPaymentDataError,
    MissingCardHolderError,
    MissingWalletIdError,
    UnsupportedPaymentTypeError,
)


class PaymentType(Enum):
    CREDIT_CARD = "creditCard"
    DIGITAL_WALLET = "digitalWallet"
    PREFERENCE_CHECKOUT = "preferenceMP"


# Payload key expected for each discriminator value.
PAYLOAD_KEYS: dict[PaymentType, str] = {
    PaymentType.CREDIT_CARD: "credit_card",
    PaymentType.DIGITAL_WALLET: "digital_wallet",
    PaymentType.PREFERENCE_CHECKOUT: "preference_mp",
}


def _require_positive(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError()


@dataclass(frozen=True)
class CreditCard:
    card_number: str
    card_holder_name: str
    expiration_month: str
    expiration_year: str
    cvv: str

    def validate(self, amount: int) -> None:
        """Check the card against the amount due; first failing rule wins."""
        _require_positive(amount)
        if len(self.card_number) != 16 or not self.card_number.isdigit():
            raise InvalidCardNumberError()
        if not self.card_holder_name.strip():
            raise MissingCardHolderError()
        if len(self.expiration_month) != 2:
            raise InvalidExpirationMonthError()
        if len(self.expiration_year) != 4:
            raise InvalidExpirationYearError()
        if len(self.cvv) != 3:
            raise InvalidCVVError()

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> CreditCard:
        return CreditCard(
            card_number=_text(raw, "card_number"),
            card_holder_name=_text(raw, "card_holder_name"),
            expiration_month=_text(raw, "expiration_month"),
            expiration_year=_text(raw, "expiration_year"),
            cvv=_text(raw, "cvv"),
        )


@dataclass(frozen=True)
class DigitalWallet:
    wallet_id: str

    def validate(self, amount: int) -> None:
        _require_positive(amount)
        if not self.wallet_id.strip():
            raise MissingWalletIdError()

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> DigitalWallet:
        return DigitalWallet(wallet_id=_text(raw, "wallet_id"))


@dataclass(frozen=True)
class PreferenceCheckout:
    """Hosted checkout: the provider collects the money on its own page."""

    def validate(self, amount: int) -> None:
        _require_positive(amount)

    @staticmethod
    def from_dict(raw: dict[str, Any]) -> PreferenceCheckout:
        return PreferenceCheckout()


PaymentMethod = Union[CreditCard, DigitalWallet, PreferenceCheckout]

_PARSERS = {
    PaymentType.CREDIT_CARD: CreditCard.from_dict,
    PaymentType.DIGITAL_WALLET: DigitalWallet.from_dict,
    PaymentType.PREFERENCE_CHECKOUT: PreferenceCheckout.from_dict,
}


@dataclass(frozen=True)
class PaymentRequest:
    payment_type: PaymentType
    method: PaymentMethod

    @staticmethod
    def from_dict(raw: Any) -> PaymentRequest:
        """Parse the wire format, enforcing "one payload, matching the tag"."""
        if not isinstance(raw, dict):
            raise InvalidPaymentDataError()

        try:
            payment_type = PaymentType(raw.get("payment_type"))
        except ValueError:
            raise UnsupportedPaymentTypeError() from None

        expected_key = PAYLOAD_KEYS[payment_type]
        present = [key for key in PAYLOAD_KEYS.values() if raw.get(key) is not None]
        if present != [expected_key]:
            raise InvalidPaymentDataError()

        payload = raw[expected_key]
        if not isinstance(payload, dict):
            raise InvalidPaymentDataError()

        return PaymentRequest(payment_type=payment_type, method=_PARSERS[payment_type](payload))


def _text(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        raise InvalidPaymentDataError()
    return str(value)
