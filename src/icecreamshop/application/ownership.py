"""Ownership checks shared by the customer-facing use cases.

A customer can only see their own orders.  Someone else's order is
reported exactly like a missing one so order IDs of other users are
never confirmed to exist.
"""

from __future__ import annotations

from icecreamshop.domain.exceptions import OrderNotFoundError
from icecreamshop.domain.model.order import Order
from icecreamshop.domain.repository.order_repository import OrderRepository


def load_order(order_repo: OrderRepository, order_id: int, user_id: int | None = None) -> Order:
    """Return the order, scoped to ``user_id`` unless it is None (admin)."""
    order = order_repo.get_by_id(order_id)
    if order is None:
        raise OrderNotFoundError()
    assert_owner(order, user_id)
    return order


def assert_owner(order: Order, user_id: int | None) -> None:
    if user_id is not None and order.user_id != user_id:
        raise OrderNotFoundError()
