"""Runtime configuration.

Values come from the process environment, optionally seeded from a
``.env`` file in the working directory.  Every variable has a default
so a bare checkout runs against a local SQLite file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from dotenv import load_dotenv

from icecreamshop.domain.model.pricing import DEFAULT_PRICES

ENV_PREFIX = "ICECREAM_"


class ConfigurationError(Exception):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///data/icecreamshop.db"
    prices: dict[int, int] = field(default_factory=lambda: dict(DEFAULT_PRICES))
    checkout_api_url: str = "https://api.mercadopago.com"
    checkout_access_token: str = ""
    checkout_timeout: float = 10.0
    log_level: str = "WARNING"

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``env`` (defaults to ``os.environ`` + ``.env``)."""
        if env is None:
            load_dotenv()
            env = os.environ

        defaults = Settings()

        def get(name: str, default: str) -> str:
            value = env.get(ENV_PREFIX + name, "").strip()
            return value or default

        raw_prices = env.get(ENV_PREFIX + "PRICES", "").strip()
        raw_timeout = get("CHECKOUT_TIMEOUT", str(defaults.checkout_timeout))

        return Settings(
            database_url=get("DATABASE_URL", defaults.database_url),
            prices=parse_prices(raw_prices) if raw_prices else defaults.prices,
            checkout_api_url=get("CHECKOUT_API_URL", defaults.checkout_api_url).rstrip("/"),
            checkout_access_token=get("CHECKOUT_ACCESS_TOKEN", ""),
            checkout_timeout=_parse_timeout(raw_timeout),
            log_level=get("LOG_LEVEL", defaults.log_level).upper(),
        )


def parse_prices(raw: str) -> dict[int, int]:
    """Parse '250:3,500:5' into {250: 3, 500: 5}."""
    prices: dict[int, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        weight, sep, price = pair.partition(":")
        if not sep:
            raise ConfigurationError(
                f"Invalid price entry '{pair}'. Expected 'weight:price'."
            )
        try:
            prices[int(weight)] = int(price)
        except ValueError:
            raise ConfigurationError(f"Invalid price entry '{pair}'.") from None
    if not prices:
        raise ConfigurationError("ICECREAM_PRICES must list at least one weight")
    return prices


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid checkout timeout '{raw}'.") from None
    if timeout <= 0:
        raise ConfigurationError("Checkout timeout must be positive")
    return timeout
