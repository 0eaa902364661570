"""Flavor — an entry of the catalog.

Flavors are reference data: they are added, listed and looked up, but
never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass

from icecreamshop.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Flavor:
    id: str
    name: str
    category: str

    @staticmethod
    def create(id: str, name: str, category: str) -> Flavor:
        """Build a flavor, rejecting blank fields."""
        if not id or not id.strip():
            raise ValidationError("Flavor id is required.")
        if not name or not name.strip():
            raise ValidationError("Flavor name is required.")
        if not category or not category.strip():
            raise ValidationError("Flavor type is required.")
        return Flavor(id=id.strip(), name=name.strip(), category=category.strip())
