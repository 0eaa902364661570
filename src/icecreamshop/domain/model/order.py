"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its ice-cream tubs.
All business invariants are enforced here; the repositories only
load and persist what the aggregate decided.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from icecreamshop.domain.exceptions import (
    InvalidFlavorCountError,
    OrderAlreadyPaidError,
    TubNotFoundError,
    UnknownFlavorError,
    ValidationError,
    ZeroWeightError,
)

if TYPE_CHECKING:
    from icecreamshop.domain.model.pricing import PricingTable
    from icecreamshop.domain.repository.flavor_repository import FlavorRepository


class PaymentState(Enum):
    PENDING = "pending"
    PAID = "paid"

    @staticmethod
    def parse(raw: str) -> PaymentState:
        try:
            return PaymentState(raw.strip().lower())
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid payment state: {raw!r}") from None


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MIN_FLAVORS_PER_TUB = 1
MAX_FLAVORS_PER_TUB = 4
UNASSIGNED_DRIVER = 0


@dataclass
class IceCreamTub:
    """A line item: one weight class filled with 1 to 4 flavors.

    ``price`` is captured from the pricing table when the tub is added,
    so removing it later refunds exactly what was charged.
    """

    id: int | None
    weight: int
    flavors: list[str]
    order_id: int | None = None
    price: int = 0


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.

    Invariant: ``total_cost == sum(tub.price for tub in tubs)``.
    """

    id: int | None
    address: str
    user_id: int
    tubs: list[IceCreamTub] = field(default_factory=list)
    delivery_driver_id: int = UNASSIGNED_DRIVER
    payment_state: PaymentState = PaymentState.PENDING
    total_cost: int = 0

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: int, address: str) -> Order:
        return Order(id=None, address=_require_address(address), user_id=user_id)

    # --- Tubs -----------------------------------------------------------------

    def add_tub(
        self,
        weight: int,
        flavors: list[str],
        catalog: FlavorRepository,
        pricing: PricingTable,
    ) -> IceCreamTub:
        """Validate and attach a new tub, growing the running total.

        Every check runs before the order is touched, so a rejected tub
        never reaches ``tubs``.
        """
        self._assert_pending()

        if not weight or weight <= 0:
            raise ZeroWeightError()
        if not MIN_FLAVORS_PER_TUB <= len(flavors) <= MAX_FLAVORS_PER_TUB:
            raise InvalidFlavorCountError()
        if not catalog.contains_all(flavors):
            raise UnknownFlavorError()
        price = pricing.price_for(weight)

        tub = IceCreamTub(
            id=None,
            weight=weight,
            flavors=list(flavors),
            order_id=self.id,
            price=price,
        )
        self.tubs.append(tub)
        self.total_cost += price
        return tub

    def remove_tub(self, tub_id: int) -> IceCreamTub:
        self._assert_pending()
        tub = self.find_tub(tub_id)
        self.tubs.remove(tub)
        self.total_cost -= tub.price
        return tub

    def find_tub(self, tub_id: int) -> IceCreamTub:
        for tub in self.tubs:
            if tub.id == tub_id:
                return tub
        raise TubNotFoundError()

    # --- Field updates --------------------------------------------------------

    def update_fields(self, address: str, payment_state: PaymentState | None = None) -> None:
        """Overwrite the address and, optionally, the payment state.

        Owner, tubs and total are never touched here.
        """
        address = _require_address(address)
        if payment_state is not None:
            if self.payment_state == PaymentState.PAID and payment_state != PaymentState.PAID:
                raise ValidationError("A paid order cannot go back to pending.")
            self.payment_state = payment_state
        self.address = address

    def mark_paid(self) -> None:
        """Transition pending -> paid."""
        self._assert_pending()
        self.payment_state = PaymentState.PAID

    # --- Delivery -------------------------------------------------------------

    def assign_driver(self, driver_id: int) -> None:
        self.delivery_driver_id = driver_id

    def unassign_driver(self) -> None:
        self.delivery_driver_id = UNASSIGNED_DRIVER

    # --- Computed properties --------------------------------------------------

    @property
    def is_paid(self) -> bool:
        return self.payment_state == PaymentState.PAID

    @property
    def has_driver(self) -> bool:
        return self.delivery_driver_id != UNASSIGNED_DRIVER

    # --- Internal helpers -----------------------------------------------------

    def _assert_pending(self) -> None:
        if self.is_paid:
            raise OrderAlreadyPaidError()


def _require_address(address: str) -> str:
    if not address or not address.strip():
        raise ValidationError("Address is required.")
    return address.strip()
