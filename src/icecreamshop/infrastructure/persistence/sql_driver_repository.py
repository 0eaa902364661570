"""SQLAlchemy-backed implementation of DeliveryDriverRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from icecreamshop.domain.exceptions import ConflictError
from icecreamshop.domain.model.people import DeliveryDriver
from icecreamshop.domain.repository.driver_repository import DeliveryDriverRepository
from icecreamshop.infrastructure.persistence.tables import DeliveryDriverRow


class SqlDeliveryDriverRepository(DeliveryDriverRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_by_id(self, user_id: int) -> DeliveryDriver | None:
        with self._session_factory() as session:
            row = session.get(DeliveryDriverRow, user_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[DeliveryDriver]:
        stmt = select(DeliveryDriverRow).order_by(DeliveryDriverRow.user_id)
        with self._session_factory() as session:
            return [self._to_domain(row) for row in session.scalars(stmt).all()]

    def save(self, driver: DeliveryDriver) -> None:
        try:
            with self._session_factory.begin() as session:
                session.merge(
                    DeliveryDriverRow(
                        user_id=driver.user_id,
                        cuil=driver.cuil,
                        age=driver.age,
                        vehicles=list(driver.vehicles),
                    )
                )
        except IntegrityError as exc:
            raise ConflictError("Cuil already registered to another driver.") from exc

    def delete(self, user_id: int) -> bool:
        with self._session_factory.begin() as session:
            row = session.get(DeliveryDriverRow, user_id)
            if row is None:
                return False
            session.delete(row)
            return True

    @staticmethod
    def _to_domain(row: DeliveryDriverRow) -> DeliveryDriver:
        return DeliveryDriver(
            user_id=row.user_id,
            cuil=row.cuil,
            age=row.age,
            vehicles=list(row.vehicles),
        )
