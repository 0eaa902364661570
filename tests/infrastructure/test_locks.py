"""Tests for the per-order lock registry."""

import threading

from icecreamshop.infrastructure.persistence.locks import OrderLocks


class TestOrderLocks:

    def test_entries_dropped_after_use(self):
        locks = OrderLocks()
        for order_id in range(100):
            with locks.hold(order_id):
                assert len(locks) == 1
        assert len(locks) == 0

    def test_entry_dropped_after_exception(self):
        locks = OrderLocks()
        try:
            with locks.hold(1):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert len(locks) == 0

    def test_same_order_is_serialized(self):
        locks = OrderLocks()
        entered = threading.Event()
        order: list[str] = []

        def second() -> None:
            entered.wait()
            with locks.hold(7):
                order.append("second")

        worker = threading.Thread(target=second)
        worker.start()
        with locks.hold(7):
            entered.set()
            # the worker cannot get in while we hold the lock
            worker.join(timeout=0.1)
            order.append("first")
        worker.join()

        assert order == ["first", "second"]
        assert len(locks) == 0

    def test_other_orders_not_blocked(self):
        locks = OrderLocks()
        done = threading.Event()

        def other() -> None:
            with locks.hold(2):
                done.set()

        with locks.hold(1):
            worker = threading.Thread(target=other)
            worker.start()
            assert done.wait(timeout=5)
            worker.join()
        assert len(locks) == 0
