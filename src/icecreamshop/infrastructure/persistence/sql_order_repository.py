"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from icecreamshop.domain.model.order import IceCreamTub, Order, PaymentState
from icecreamshop.domain.repository.order_repository import OrderMutation, OrderRepository
from icecreamshop.infrastructure.persistence.database import lock_for_write
from icecreamshop.infrastructure.persistence.locks import OrderLocks
from icecreamshop.infrastructure.persistence.tables import OrderRow, TubRow


class SqlOrderRepository(OrderRepository):

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        locks: OrderLocks | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._locks = locks or OrderLocks()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        with self._session_factory() as session:
            row = session.get(OrderRow, order_id)
            return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Order]:
        return self._list(select(OrderRow))

    def list_by_user(self, user_id: int) -> list[Order]:
        return self._list(select(OrderRow).where(OrderRow.user_id == user_id))

    def list_by_driver(self, driver_id: int) -> list[Order]:
        return self._list(select(OrderRow).where(OrderRow.delivery_driver_id == driver_id))

    def save(self, order: Order) -> None:
        with self._session_factory.begin() as session:
            row = OrderRow(
                address=order.address,
                user_id=order.user_id,
                delivery_driver_id=order.delivery_driver_id,
                payment_state=order.payment_state.value,
                total_cost=order.total_cost,
            )
            session.add(row)
            session.flush()
            order.id = row.id

    def mutate(self, order_id: int, mutation: OrderMutation) -> Order | None:
        # The process-local lock serializes writers that share this process;
        # the database write lock covers writers in other processes.
        with self._locks.hold(order_id), self._session_factory.begin() as session:
            lock_for_write(session)
            row = session.get(OrderRow, order_id, with_for_update=True)
            if row is None:
                return None

            order = self._to_domain(row)
            mutation(order)
            self._apply(session, row, order)
        return order

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(session: Session, row: OrderRow, order: Order) -> None:
        """Write the mutated aggregate back onto its row and tub rows."""
        row.address = order.address
        row.delivery_driver_id = order.delivery_driver_id
        row.payment_state = order.payment_state.value
        row.total_cost = order.total_cost

        kept = {tub.id for tub in order.tubs if tub.id is not None}
        for tub_row in list(row.tubs):
            if tub_row.id not in kept:
                row.tubs.remove(tub_row)

        added: list[tuple[IceCreamTub, TubRow]] = []
        for tub in order.tubs:
            if tub.id is None:
                tub_row = TubRow(weight=tub.weight, flavors=list(tub.flavors), price=tub.price)
                row.tubs.append(tub_row)
                added.append((tub, tub_row))

        session.flush()
        for tub, tub_row in added:
            tub.id = tub_row.id
            tub.order_id = row.id

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            address=row.address,
            user_id=row.user_id,
            tubs=[
                IceCreamTub(
                    id=t.id,
                    weight=t.weight,
                    flavors=list(t.flavors),
                    order_id=t.order_id,
                    price=t.price,
                )
                for t in row.tubs
            ],
            delivery_driver_id=row.delivery_driver_id,
            payment_state=PaymentState(row.payment_state),
            total_cost=row.total_cost,
        )

    # --- Query helpers --------------------------------------------------------

    def _list(self, stmt) -> list[Order]:
        with self._session_factory() as session:
            rows = session.scalars(stmt.order_by(OrderRow.id)).all()
            return [self._to_domain(row) for row in rows]
