"""PricingTable value object.

Maps every sellable tub weight (grams) to its unit price.  Built once at
start-up from configuration; nothing mutates it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from icecreamshop.domain.exceptions import UnsupportedWeightError, ValidationError

DEFAULT_PRICES: dict[int, int] = {250: 3, 500: 5, 1000: 10}


@dataclass(frozen=True)
class PricingTable:

    prices: Mapping[int, int] = field(default_factory=lambda: dict(DEFAULT_PRICES))

    def __post_init__(self) -> None:
        for weight, price in self.prices.items():
            if not isinstance(weight, int) or weight <= 0:
                raise ValidationError(f"Tub weight must be a positive integer, got {weight!r}")
            if not isinstance(price, int) or price < 0:
                raise ValidationError(f"Price for {weight}g cannot be negative, got {price!r}")
        # Freeze the mapping so a caller's dict cannot change it later.
        object.__setattr__(self, "prices", MappingProxyType(dict(self.prices)))

    def price_for(self, weight: int) -> int:
        try:
            return self.prices[weight]
        except KeyError:
            raise UnsupportedWeightError() from None
