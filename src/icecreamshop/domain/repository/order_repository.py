"""Abstract repository for Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live
elsewhere and must make ``mutate`` atomic per order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from icecreamshop.domain.model.order import Order

OrderMutation = Callable[[Order], None]


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return a snapshot of an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def list_by_user(self, user_id: int) -> list[Order]:
        """Return the orders owned by a user, oldest first."""

    @abstractmethod
    def list_by_driver(self, driver_id: int) -> list[Order]:
        """Return the orders currently assigned to a delivery driver."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a NEW order and assign its ID."""

    @abstractmethod
    def mutate(self, order_id: int, mutation: OrderMutation) -> Order | None:
        """Load, change and persist one order as a single atomic step.

        ``mutation`` receives a working copy.  If it raises, nothing is
        persisted and the exception propagates.  Tubs added by the
        mutation get their IDs assigned before this returns.

        Returns the persisted snapshot, or None if the order does not exist.
        """
