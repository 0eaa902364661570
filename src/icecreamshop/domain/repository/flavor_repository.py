"""Abstract repository for the flavor catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from icecreamshop.domain.model.flavor import Flavor


class FlavorRepository(ABC):

    @abstractmethod
    def get_by_id(self, flavor_id: str) -> Flavor | None:
        """Return a flavor by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Flavor]:
        """Return every flavor in the catalog."""

    @abstractmethod
    def list_by_category(self, category: str) -> list[Flavor]:
        """Return the flavors of one category."""

    @abstractmethod
    def add(self, flavor: Flavor) -> None:
        """Persist a new flavor.  Raises DuplicateFlavorError on a taken ID."""

    def contains_all(self, flavor_ids: Iterable[str]) -> bool:
        """True if every ID is in the catalog."""
        return all(self.get_by_id(flavor_id) is not None for flavor_id in flavor_ids)
