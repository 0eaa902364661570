"""Abstract repository for delivery drivers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from icecreamshop.domain.model.people import DeliveryDriver


class DeliveryDriverRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> DeliveryDriver | None:
        """Return the driver registered for a user, or None."""

    @abstractmethod
    def list_all(self) -> list[DeliveryDriver]:
        """Return every driver."""

    @abstractmethod
    def save(self, driver: DeliveryDriver) -> None:
        """Persist a new or updated driver."""

    @abstractmethod
    def delete(self, user_id: int) -> bool:
        """Remove a driver.  Returns False if there was none."""

    def exists(self, user_id: int) -> bool:
        return self.get_by_id(user_id) is not None
