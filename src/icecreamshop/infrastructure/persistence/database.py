"""Engine / session factory setup and first-run seeding."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine, select
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from icecreamshop.infrastructure.persistence.tables import Base, FlavorRow, UserRow

logger = logging.getLogger(__name__)

INITIAL_FLAVORS: list[tuple[str, str, str]] = [
    ("ddl", "Dulce de leche", "Dulce de leches"),
    ("mrc", "Chocolate marroc", "Chocolates"),
    ("trm", "Tramontana", "Cremas"),
    ("frt", "Frutilla al agua", "Al agua"),
]

ADMIN_USER = {"email": "abcde@gmail.com", "name": "abcde", "last_name": "xyz"}


def create_database(url: str) -> tuple[sessionmaker[Session], Engine]:
    """Create the schema if needed and return (session_factory, engine)."""
    engine = _create_engine(url)
    Base.metadata.create_all(engine)
    return sessionmaker(engine, expire_on_commit=False), engine


def seed_reference_data(session_factory: sessionmaker[Session]) -> None:
    """Insert the starting catalog and the admin user on an empty database."""
    with session_factory.begin() as session:
        if session.scalars(select(FlavorRow).limit(1)).first() is None:
            session.add_all(
                FlavorRow(id=fid, name=name, category=category)
                for fid, name, category in INITIAL_FLAVORS
            )
            logger.info("Seeded %d flavors", len(INITIAL_FLAVORS))
        if session.scalars(select(UserRow).limit(1)).first() is None:
            session.add(UserRow(**ADMIN_USER))
            logger.info("Seeded admin user %s", ADMIN_USER["email"])


def lock_for_write(session: Session) -> None:
    """Take the database write lock before the transaction reads anything.

    pysqlite only sends BEGIN right before the first write, so a
    read-then-write transaction on a SQLite file holds no lock while it
    reads and another process can slip in between.  Other backends get
    their row lock from ``SELECT ... FOR UPDATE`` instead.
    """
    if is_sqlite_file(session.get_bind().url):
        session.connection().exec_driver_sql("BEGIN IMMEDIATE")


def is_sqlite_file(url: str | URL) -> bool:
    parsed = make_url(url)
    return parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:")


def _create_engine(url: str) -> Engine:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url)

    database = parsed.database
    if not is_sqlite_file(parsed):
        # One shared connection, or every session would see its own empty db.
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, connect_args={"check_same_thread": False, "timeout": 30})
