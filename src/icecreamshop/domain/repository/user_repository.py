"""Abstract repository for users."""

from __future__ import annotations

from abc import ABC, abstractmethod

from icecreamshop.domain.model.people import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by exact email, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[User]:
        """Return every user."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist a new user and assign its ID."""
