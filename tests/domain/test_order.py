"""Unit tests for the Order aggregate and its business rules."""

import pytest

from icecreamshop.domain.exceptions import (
    InvalidFlavorCountError,
    OrderAlreadyPaidError,
    TubNotFoundError,
    UnknownFlavorError,
    UnsupportedWeightError,
    ValidationError,
    ZeroWeightError,
)
from icecreamshop.domain.model.order import IceCreamTub, Order, PaymentState
from icecreamshop.domain.model.pricing import PricingTable
from tests.fakes import FLAVORS, FakeFlavorRepository

PRICING = PricingTable({250: 3, 500: 5, 1000: 10})


def _catalog() -> FakeFlavorRepository:
    return FakeFlavorRepository(FLAVORS)


def _order() -> Order:
    order = Order.create(user_id=1, address="Calle 123")
    order.id = 7
    return order


def _persist_ids(order: Order, start: int = 1) -> None:
    """Stand-in for the repository: give new tubs an ID."""
    next_id = start
    for tub in order.tubs:
        if tub.id is None:
            tub.id = next_id
            next_id += 1


class TestOrderCreation:

    def test_new_order_is_empty_and_pending(self):
        order = Order.create(user_id=1, address="Calle 123")
        assert order.id is None  # assigned by repository
        assert order.tubs == []
        assert order.total_cost == 0
        assert order.payment_state == PaymentState.PENDING
        assert order.delivery_driver_id == 0
        assert not order.has_driver

    def test_address_is_stripped(self):
        order = Order.create(user_id=1, address="  Calle 123  ")
        assert order.address == "Calle 123"

    @pytest.mark.parametrize("address", ["", "   "])
    def test_blank_address_rejected(self, address):
        with pytest.raises(ValidationError, match="Address is required"):
            Order.create(user_id=1, address=address)


class TestAddTub:

    def test_adding_tub_raises_total(self):
        order = _order()
        tub = order.add_tub(500, ["ddl", "frt"], _catalog(), PRICING)
        assert order.total_cost == 5
        assert tub.price == 5
        assert tub.order_id == 7
        assert tub.flavors == ["ddl", "frt"]
        assert order.tubs == [tub]

    def test_four_flavors_accepted(self):
        order = _order()
        order.add_tub(1000, ["ddl", "mrc", "trm", "frt"], _catalog(), PRICING)
        assert order.total_cost == 10

    def test_zero_weight_rejected(self):
        order = _order()
        with pytest.raises(ZeroWeightError):
            order.add_tub(0, ["ddl"], _catalog(), PRICING)

    @pytest.mark.parametrize("flavors", [[], ["ddl", "mrc", "trm", "frt", "ddl"]])
    def test_bad_flavor_count_rejected(self, flavors):
        order = _order()
        with pytest.raises(InvalidFlavorCountError):
            order.add_tub(500, flavors, _catalog(), PRICING)

    def test_unknown_flavor_leaves_order_untouched(self):
        order = _order()
        order.add_tub(250, ["mrc"], _catalog(), PRICING)

        with pytest.raises(UnknownFlavorError):
            order.add_tub(500, ["ddl", "pistachio"], _catalog(), PRICING)

        assert len(order.tubs) == 1
        assert order.total_cost == 3

    def test_unsupported_weight_leaves_order_untouched(self):
        order = _order()
        with pytest.raises(UnsupportedWeightError):
            order.add_tub(750, ["ddl"], _catalog(), PRICING)
        assert order.tubs == []
        assert order.total_cost == 0

    def test_zero_weight_checked_before_flavors(self):
        order = _order()
        with pytest.raises(ZeroWeightError):
            order.add_tub(0, [], _catalog(), PRICING)

    def test_paid_order_rejects_new_tubs(self):
        order = _order()
        order.add_tub(250, ["mrc"], _catalog(), PRICING)
        order.mark_paid()
        with pytest.raises(OrderAlreadyPaidError):
            order.add_tub(250, ["mrc"], _catalog(), PRICING)


class TestRemoveTub:

    def test_remove_lowers_total(self):
        order = _order()
        order.add_tub(500, ["ddl", "frt"], _catalog(), PRICING)
        order.add_tub(250, ["mrc"], _catalog(), PRICING)
        _persist_ids(order)

        order.remove_tub(1)

        assert order.total_cost == 3
        assert [t.id for t in order.tubs] == [2]

    def test_unknown_tub_rejected_and_total_unchanged(self):
        order = _order()
        order.add_tub(500, ["ddl"], _catalog(), PRICING)
        _persist_ids(order)

        with pytest.raises(TubNotFoundError):
            order.remove_tub(99)
        assert order.total_cost == 5

    def test_refund_uses_price_captured_at_add_time(self):
        order = Order(
            id=1,
            address="Calle 123",
            user_id=1,
            tubs=[IceCreamTub(id=1, weight=500, flavors=["ddl"], order_id=1, price=4)],
            total_cost=4,
        )
        order.remove_tub(1)
        assert order.total_cost == 0


class TestTotalInvariant:

    def test_total_tracks_every_mutation(self):
        order = _order()
        steps = [
            ("add", 500, ["ddl"]),
            ("add", 250, ["mrc", "trm"]),
            ("add", 1000, ["frt"]),
            ("remove", 2, None),
            ("add", 250, ["ddl"]),
            ("remove", 1, None),
        ]
        next_id = 1
        for op, arg, flavors in steps:
            if op == "add":
                order.add_tub(arg, flavors, _catalog(), PRICING)
                _persist_ids(order, start=next_id)
                next_id += 1
            else:
                order.remove_tub(arg)
            assert order.total_cost == sum(PRICING.price_for(t.weight) for t in order.tubs)

        assert order.total_cost == 13


class TestUpdateFields:

    def test_overwrites_address_and_state_only(self):
        order = _order()
        order.add_tub(500, ["ddl"], _catalog(), PRICING)

        order.update_fields("Otra calle 9", PaymentState.PAID)

        assert order.address == "Otra calle 9"
        assert order.payment_state == PaymentState.PAID
        assert order.user_id == 1
        assert order.total_cost == 5
        assert len(order.tubs) == 1

    def test_state_left_alone_when_not_given(self):
        order = _order()
        order.update_fields("Otra calle 9")
        assert order.payment_state == PaymentState.PENDING

    def test_paid_cannot_go_back_to_pending(self):
        order = _order()
        order.mark_paid()
        with pytest.raises(ValidationError, match="cannot go back"):
            order.update_fields("Calle 123", PaymentState.PENDING)
        assert order.is_paid

    def test_blank_address_rejected_without_changing_state(self):
        order = _order()
        with pytest.raises(ValidationError):
            order.update_fields("", PaymentState.PAID)
        assert order.payment_state == PaymentState.PENDING


class TestStateTransitions:

    def test_mark_paid(self):
        order = _order()
        order.mark_paid()
        assert order.payment_state == PaymentState.PAID

    def test_mark_paid_twice_rejected(self):
        order = _order()
        order.mark_paid()
        with pytest.raises(OrderAlreadyPaidError):
            order.mark_paid()

    def test_assign_and_unassign_driver(self):
        order = _order()
        order.assign_driver(3)
        assert order.delivery_driver_id == 3
        assert order.has_driver
        order.unassign_driver()
        assert order.delivery_driver_id == 0

    @pytest.mark.parametrize("raw,expected", [("paid", PaymentState.PAID), (" Pending ", PaymentState.PENDING)])
    def test_parse_payment_state(self, raw, expected):
        assert PaymentState.parse(raw) == expected

    def test_parse_unknown_payment_state(self):
        with pytest.raises(ValidationError, match="Invalid payment state"):
            PaymentState.parse("refunded")
