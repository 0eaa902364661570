"""Users and delivery drivers.

These are collaborators of the order core: orders belong to a user and
may be handed to a driver.  Accounts and sessions live elsewhere, so
only the fields the order flow needs are modelled.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from icecreamshop.domain.exceptions import ValidationError


@dataclass
class User:
    id: int | None
    email: str
    name: str
    last_name: str

    @staticmethod
    def create(email: str, name: str, last_name: str) -> User:
        if not email or not email.strip():
            raise ValidationError("Email is required.")
        if not name or not name.strip():
            raise ValidationError("First name is required.")
        if not last_name or not last_name.strip():
            raise ValidationError("Last name is required.")
        return User(id=None, email=email.strip(), name=name.strip(), last_name=last_name.strip())


MIN_DRIVER_AGE = 18


@dataclass
class DeliveryDriver:
    """A user who can deliver orders; keyed by the user's id."""

    user_id: int
    cuil: str
    age: int
    vehicles: list[str] = field(default_factory=list)

    @staticmethod
    def create(user_id: int, cuil: str, age: int, vehicles: list[str]) -> DeliveryDriver:
        if not 10 <= len(cuil) <= 11:
            raise ValidationError("Cuil must be 10 or 11 digits long")
        if age < MIN_DRIVER_AGE:
            raise ValidationError("Age must be equal or greater than 18.")
        if not vehicles:
            raise ValidationError("You must have at least one vehicle.")
        for vehicle in vehicles:
            if not 6 <= len(vehicle) <= 7:
                raise ValidationError("Vehicle id must be between 6 and 7 digits")
        return DeliveryDriver(user_id=user_id, cuil=cuil, age=age, vehicles=list(vehicles))
