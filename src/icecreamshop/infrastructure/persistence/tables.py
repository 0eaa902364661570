"""SQLAlchemy table mappings.

Rows are persistence-only types: repositories translate them to and
from the domain dataclasses, so the domain never imports SQLAlchemy.
"""

from __future__ import annotations

import json
from typing import Any

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.types import TypeDecorator


class EncodedList(TypeDecorator):
    """A list of strings stored as JSON text.

    Serializes on write and deserializes on read; callers only ever see
    Python lists.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str:
        return json.dumps(list(value or []))

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        if not value:
            return []
        return list(json.loads(value))


class Base(DeclarativeBase):
    pass


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)


class DeliveryDriverRow(Base):
    __tablename__ = "delivery_drivers"
    __table_args__ = (CheckConstraint("age > 17", name="ck_driver_age"),)

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
    cuil: Mapped[str] = mapped_column(String(11), unique=True, nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    vehicles: Mapped[list[str]] = mapped_column(EncodedList, nullable=False)


class FlavorRow(Base):
    __tablename__ = "flavors"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False, index=True)


class OrderRow(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    address: Mapped[str] = mapped_column(String(500), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    # 0 means "no driver", so this is not a foreign key.
    delivery_driver_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    payment_state: Mapped[str] = mapped_column(String(20), nullable=False)
    total_cost: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    tubs: Mapped[list[TubRow]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="TubRow.id",
        lazy="selectin",
    )


class TubRow(Base):
    __tablename__ = "ice_cream_tubs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"), nullable=False, index=True)
    weight: Mapped[int] = mapped_column(Integer, nullable=False)
    flavors: Mapped[list[str]] = mapped_column(EncodedList, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[OrderRow] = relationship(back_populates="tubs")
