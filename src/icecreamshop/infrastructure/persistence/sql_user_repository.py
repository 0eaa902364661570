"""SQLAlchemy-backed implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from icecreamshop.domain.exceptions import DuplicateEmailError
from icecreamshop.domain.model.people import User
from icecreamshop.domain.repository.user_repository import UserRepository
from icecreamshop.infrastructure.persistence.tables import UserRow


class SqlUserRepository(UserRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def get_by_id(self, user_id: int) -> User | None:
        with self._session_factory() as session:
            row = session.get(UserRow, user_id)
            return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        with self._session_factory() as session:
            row = session.scalars(select(UserRow).where(UserRow.email == email)).first()
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[User]:
        with self._session_factory() as session:
            rows = session.scalars(select(UserRow).order_by(UserRow.id)).all()
            return [self._to_domain(row) for row in rows]

    def save(self, user: User) -> None:
        try:
            with self._session_factory.begin() as session:
                row = UserRow(email=user.email, name=user.name, last_name=user.last_name)
                session.add(row)
                session.flush()
                user.id = row.id
        except IntegrityError as exc:
            raise DuplicateEmailError() from exc

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(id=row.id, email=row.email, name=row.name, last_name=row.last_name)
