"""SQLAlchemy-backed implementation of FlavorRepository."""

from __future__ import annotations

from typing import Iterable

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from icecreamshop.domain.exceptions import DuplicateFlavorError
from icecreamshop.domain.model.flavor import Flavor
from icecreamshop.domain.repository.flavor_repository import FlavorRepository
from icecreamshop.infrastructure.persistence.tables import FlavorRow


class SqlFlavorRepository(FlavorRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # --- FlavorRepository interface -------------------------------------------

    def get_by_id(self, flavor_id: str) -> Flavor | None:
        with self._session_factory() as session:
            row = session.get(FlavorRow, flavor_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Flavor]:
        with self._session_factory() as session:
            rows = session.scalars(select(FlavorRow).order_by(FlavorRow.id)).all()
            return [self._to_domain(row) for row in rows]

    def list_by_category(self, category: str) -> list[Flavor]:
        stmt = select(FlavorRow).where(FlavorRow.category == category).order_by(FlavorRow.id)
        with self._session_factory() as session:
            return [self._to_domain(row) for row in session.scalars(stmt).all()]

    def add(self, flavor: Flavor) -> None:
        try:
            with self._session_factory.begin() as session:
                session.add(FlavorRow(id=flavor.id, name=flavor.name, category=flavor.category))
        except IntegrityError as exc:
            raise DuplicateFlavorError() from exc

    def contains_all(self, flavor_ids: Iterable[str]) -> bool:
        wanted = set(flavor_ids)
        if not wanted:
            return True
        stmt = select(func.count()).select_from(FlavorRow).where(FlavorRow.id.in_(wanted))
        with self._session_factory() as session:
            return session.scalar(stmt) == len(wanted)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: FlavorRow) -> Flavor:
        return Flavor(id=row.id, name=row.name, category=row.category)
