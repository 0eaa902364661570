"""Integration tests for the SQLAlchemy repositories.

Each test gets its own SQLite file under pytest's ``tmp_path``.
"""

import threading
import time

import pytest

from icecreamshop.application.manage_tubs import AddTubHandler
from icecreamshop.domain.exceptions import ConflictError, DuplicateEmailError, DuplicateFlavorError
from icecreamshop.domain.model.flavor import Flavor
from icecreamshop.domain.model.order import Order, PaymentState
from icecreamshop.domain.model.people import DeliveryDriver, User
from icecreamshop.domain.model.pricing import PricingTable
from icecreamshop.infrastructure.persistence.database import (
    INITIAL_FLAVORS,
    create_database,
    is_sqlite_file,
    seed_reference_data,
)
from icecreamshop.infrastructure.persistence.sql_driver_repository import SqlDeliveryDriverRepository
from icecreamshop.infrastructure.persistence.sql_flavor_repository import SqlFlavorRepository
from icecreamshop.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from icecreamshop.infrastructure.persistence.sql_user_repository import SqlUserRepository

PRICING = PricingTable()


@pytest.fixture
def session_factory(tmp_path):
    factory, engine = create_database(f"sqlite:///{tmp_path / 'shop.db'}")
    seed_reference_data(factory)
    yield factory
    engine.dispose()


@pytest.fixture
def orders(session_factory):
    return SqlOrderRepository(session_factory)


@pytest.fixture
def flavors(session_factory):
    return SqlFlavorRepository(session_factory)


def _new_order(orders: SqlOrderRepository, user_id: int = 1) -> Order:
    order = Order.create(user_id=user_id, address="Calle 123")
    orders.save(order)
    return order


# ── Schema and seeding ───────────────────────────────────────────────────────


class TestSeeding:

    def test_initial_catalog_and_admin(self, session_factory, flavors):
        assert [f.id for f in flavors.list_all()] == sorted(fid for fid, _, _ in INITIAL_FLAVORS)
        admin = SqlUserRepository(session_factory).get_by_email("abcde@gmail.com")
        assert admin is not None
        assert admin.id == 1

    def test_seeding_twice_adds_nothing(self, session_factory, flavors):
        seed_reference_data(session_factory)
        assert len(flavors.list_all()) == len(INITIAL_FLAVORS)
        assert len(SqlUserRepository(session_factory).list_all()) == 1

    def test_in_memory_database_is_shared_between_sessions(self):
        factory, engine = create_database("sqlite://")
        seed_reference_data(factory)
        assert len(SqlFlavorRepository(factory).list_all()) == len(INITIAL_FLAVORS)
        engine.dispose()

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "shop.db"
        _, engine = create_database(f"sqlite:///{path}")
        assert path.parent.is_dir()
        engine.dispose()


# ── Orders ───────────────────────────────────────────────────────────────────


class TestSqlOrderRepository:

    def test_save_assigns_id(self, orders):
        first = _new_order(orders)
        second = _new_order(orders)
        assert first.id == 1
        assert second.id == 2

    def test_round_trip(self, orders):
        order = _new_order(orders)
        loaded = orders.get_by_id(order.id)
        assert loaded.address == "Calle 123"
        assert loaded.payment_state == PaymentState.PENDING
        assert loaded.tubs == []

    def test_missing_order(self, orders):
        assert orders.get_by_id(999) is None
        assert orders.mutate(999, lambda o: o.mark_paid()) is None

    def test_mutate_persists_tubs_with_ids(self, orders, flavors):
        order = _new_order(orders)

        updated = orders.mutate(order.id, lambda o: o.add_tub(500, ["ddl", "frt"], flavors, PRICING))

        tub = updated.tubs[0]
        assert tub.id is not None
        assert tub.order_id == order.id

        loaded = orders.get_by_id(order.id)
        assert loaded.total_cost == 5
        assert loaded.tubs[0].flavors == ["ddl", "frt"]
        assert loaded.tubs[0].price == 5

    def test_mutate_removes_tub_rows(self, orders, flavors):
        order = _new_order(orders)
        orders.mutate(order.id, lambda o: o.add_tub(500, ["ddl"], flavors, PRICING))
        updated = orders.mutate(order.id, lambda o: o.add_tub(250, ["mrc"], flavors, PRICING))
        first_id = updated.tubs[0].id

        orders.mutate(order.id, lambda o: o.remove_tub(first_id))

        loaded = orders.get_by_id(order.id)
        assert [t.weight for t in loaded.tubs] == [250]
        assert loaded.total_cost == 3

    def test_failed_mutation_rolls_back(self, orders, flavors):
        order = _new_order(orders)

        def add_then_fail(o: Order) -> None:
            o.add_tub(500, ["ddl"], flavors, PRICING)
            o.update_fields("Somewhere else")
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            orders.mutate(order.id, add_then_fail)

        loaded = orders.get_by_id(order.id)
        assert loaded.tubs == []
        assert loaded.total_cost == 0
        assert loaded.address == "Calle 123"

    def test_list_by_user_and_driver(self, orders):
        mine = _new_order(orders, user_id=1)
        _new_order(orders, user_id=2)
        orders.mutate(mine.id, lambda o: o.assign_driver(2))

        assert [o.id for o in orders.list_by_user(1)] == [mine.id]
        assert [o.id for o in orders.list_by_driver(2)] == [mine.id]
        assert len(orders.list_all()) == 2

    def test_concurrent_adds_keep_every_tub(self, orders, flavors):
        order = _new_order(orders)
        handler = AddTubHandler(orders, flavors, PRICING)
        barrier = threading.Barrier(8)
        errors: list[Exception] = []

        def add() -> None:
            barrier.wait()
            try:
                handler.handle(order.id, 1, 250, ["mrc"])
            except Exception as exc:  # surfaced below
                errors.append(exc)

        threads = [threading.Thread(target=add) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        loaded = orders.get_by_id(order.id)
        assert len(loaded.tubs) == 8
        assert loaded.total_cost == 24


class _PausingCatalog(SqlFlavorRepository):
    """Signals once the flavor check starts, then holds the transaction open."""

    def __init__(self, session_factory, reading: threading.Event) -> None:
        super().__init__(session_factory)
        self._reading = reading

    def contains_all(self, flavor_ids):
        self._reading.set()
        time.sleep(0.2)
        return super().contains_all(flavor_ids)


class TestSeparateEngines:
    """Two engines on one file act like two processes: nothing in memory is shared."""

    @pytest.fixture
    def two_engines(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'shared.db'}"
        first, first_engine = create_database(url)
        seed_reference_data(first)
        second, second_engine = create_database(url)
        yield first, second
        first_engine.dispose()
        second_engine.dispose()

    def test_adds_from_both_engines_are_kept(self, two_engines):
        first, second = two_engines
        first_orders = SqlOrderRepository(first)
        second_orders = SqlOrderRepository(second)
        order = _new_order(first_orders)
        reading = threading.Event()
        slow_add = AddTubHandler(first_orders, _PausingCatalog(first, reading), PRICING)
        fast_add = AddTubHandler(second_orders, SqlFlavorRepository(second), PRICING)
        errors: list[Exception] = []

        def run(add) -> None:
            try:
                add()
            except Exception as exc:  # surfaced below
                errors.append(exc)

        slow = threading.Thread(target=run, args=(lambda: slow_add.handle(order.id, 1, 500, ["ddl"]),))
        slow.start()
        assert reading.wait(timeout=5)
        run(lambda: fast_add.handle(order.id, 1, 250, ["mrc"]))
        slow.join()

        assert errors == []
        loaded = second_orders.get_by_id(order.id)
        assert sorted(t.weight for t in loaded.tubs) == [250, 500]
        assert loaded.total_cost == 8

    def test_each_engine_sees_the_others_commits(self, two_engines):
        first, second = two_engines
        order = _new_order(SqlOrderRepository(first))

        SqlOrderRepository(second).mutate(order.id, lambda o: o.assign_driver(2))

        assert SqlOrderRepository(first).get_by_id(order.id).delivery_driver_id == 2


class TestIsSqliteFile:

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("sqlite:///data/shop.db", True),
            ("sqlite:////tmp/shop.db", True),
            ("sqlite://", False),
            ("sqlite:///:memory:", False),
            ("postgresql://u:p@localhost/shop", False),
        ],
    )
    def test_detects_file_backed_sqlite(self, url, expected):
        assert is_sqlite_file(url) is expected


# ── Reference data ───────────────────────────────────────────────────────────


class TestSqlFlavorRepository:

    def test_add_and_filter(self, flavors):
        flavors.add(Flavor(id="pst", name="Pistacho", category="Cremas"))
        assert [f.id for f in flavors.list_by_category("Cremas")] == ["pst", "trm"]

    def test_duplicate_id(self, flavors):
        with pytest.raises(DuplicateFlavorError):
            flavors.add(Flavor(id="ddl", name="Otro", category="Cremas"))

    def test_contains_all(self, flavors):
        assert flavors.contains_all(["ddl", "mrc", "ddl"])
        assert not flavors.contains_all(["ddl", "pistachio"])


class TestSqlUserRepository:

    def test_save_assigns_id(self, session_factory):
        users = SqlUserRepository(session_factory)
        user = User.create("new@gmail.com", "New", "User")
        users.save(user)
        assert user.id == 2
        assert users.get_by_id(2).email == "new@gmail.com"

    def test_duplicate_email(self, session_factory):
        users = SqlUserRepository(session_factory)
        with pytest.raises(DuplicateEmailError):
            users.save(User.create("abcde@gmail.com", "Again", "Admin"))


class TestSqlDeliveryDriverRepository:

    def test_save_list_delete(self, session_factory):
        drivers = SqlDeliveryDriverRepository(session_factory)
        drivers.save(DeliveryDriver(user_id=1, cuil="20123456789", age=30, vehicles=["AB123CD", "XYZ987"]))

        assert drivers.get_by_id(1).vehicles == ["AB123CD", "XYZ987"]
        assert [d.user_id for d in drivers.list_all()] == [1]
        assert drivers.delete(1) is True
        assert drivers.delete(1) is False
        assert drivers.get_by_id(1) is None

    def test_cuil_taken(self, session_factory):
        users = SqlUserRepository(session_factory)
        users.save(User.create("second@gmail.com", "Second", "User"))
        drivers = SqlDeliveryDriverRepository(session_factory)
        drivers.save(DeliveryDriver(user_id=1, cuil="20123456789", age=30, vehicles=["AB123CD"]))

        with pytest.raises(ConflictError, match="Cuil"):
            drivers.save(DeliveryDriver(user_id=2, cuil="20123456789", age=40, vehicles=["XYZ987"]))
