"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Objects are built lazily and cached for the life of the process, so
every command shares one engine and one per-order lock registry.
``reset()`` drops the cache (used by tests that point the environment
at a fresh database).
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.orm import Session, sessionmaker

from icecreamshop.domain.model.pricing import PricingTable
from icecreamshop.domain.service.payment_dispatcher import PaymentDispatcher
from icecreamshop.infrastructure.config import Settings
from icecreamshop.infrastructure.payments.hosted_checkout import HostedCheckoutGateway
from icecreamshop.infrastructure.persistence.database import (
    create_database,
    seed_reference_data,
)
from icecreamshop.infrastructure.persistence.sql_driver_repository import (
    SqlDeliveryDriverRepository,
)
from icecreamshop.infrastructure.persistence.sql_flavor_repository import (
    SqlFlavorRepository,
)
from icecreamshop.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)
from icecreamshop.infrastructure.persistence.sql_user_repository import (
    SqlUserRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def session_factory() -> sessionmaker[Session]:
    factory, _ = create_database(settings().database_url)
    seed_reference_data(factory)
    return factory


@lru_cache(maxsize=1)
def pricing_table() -> PricingTable:
    return PricingTable(settings().prices)


@lru_cache(maxsize=1)
def order_repository() -> SqlOrderRepository:
    return SqlOrderRepository(session_factory())


def flavor_repository() -> SqlFlavorRepository:
    return SqlFlavorRepository(session_factory())


def user_repository() -> SqlUserRepository:
    return SqlUserRepository(session_factory())


def driver_repository() -> SqlDeliveryDriverRepository:
    return SqlDeliveryDriverRepository(session_factory())


def payment_dispatcher() -> PaymentDispatcher:
    cfg = settings()
    gateway = HostedCheckoutGateway(
        access_token=cfg.checkout_access_token,
        api_base=cfg.checkout_api_url,
        timeout=cfg.checkout_timeout,
    )
    return PaymentDispatcher(gateway)


def reset() -> None:
    for cached in (order_repository, pricing_table, session_factory, settings):
        cached.cache_clear()
