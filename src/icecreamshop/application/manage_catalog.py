"""Application services: flavor catalog and user directory upkeep."""

from __future__ import annotations

import logging

from icecreamshop.application.dto import FlavorDTO, to_flavor_dto
from icecreamshop.domain.exceptions import (
    DuplicateEmailError,
    DuplicateFlavorError,
    FlavorNotFoundError,
)
from icecreamshop.domain.model.flavor import Flavor
from icecreamshop.domain.model.people import User
from icecreamshop.domain.repository.flavor_repository import FlavorRepository
from icecreamshop.domain.repository.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AddFlavorHandler:

    def __init__(self, flavor_repo: FlavorRepository) -> None:
        self._flavor_repo = flavor_repo

    def handle(self, flavor_id: str, name: str, category: str) -> FlavorDTO:
        """Add a new flavor to the catalog."""
        flavor = Flavor.create(id=flavor_id, name=name, category=category)
        if self._flavor_repo.get_by_id(flavor.id) is not None:
            raise DuplicateFlavorError()

        self._flavor_repo.add(flavor)
        logger.info("Flavor '%s' added to catalog", flavor.id)
        return to_flavor_dto(flavor)


class ListFlavorsHandler:

    def __init__(self, flavor_repo: FlavorRepository) -> None:
        self._flavor_repo = flavor_repo

    def handle(self, category: str | None = None) -> list[FlavorDTO]:
        if category:
            flavors = self._flavor_repo.list_by_category(category)
        else:
            flavors = self._flavor_repo.list_all()
        return [to_flavor_dto(f) for f in flavors]


class AddUserHandler:

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    def handle(self, email: str, name: str, last_name: str) -> User:
        user = User.create(email=email, name=name, last_name=last_name)
        if self._user_repo.get_by_email(user.email) is not None:
            raise DuplicateEmailError()

        self._user_repo.save(user)
        logger.info("User #%s created", user.id)
        return user


class ShowFlavorHandler:

    def __init__(self, flavor_repo: FlavorRepository) -> None:
        self._flavor_repo = flavor_repo

    def handle(self, flavor_id: str) -> FlavorDTO:
        flavor = self._flavor_repo.get_by_id(flavor_id.strip())
        if flavor is None:
            raise FlavorNotFoundError()
        return to_flavor_dto(flavor)
