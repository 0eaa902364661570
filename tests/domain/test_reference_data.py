"""Unit tests for the pricing table, flavors, users and drivers."""

import pytest

from icecreamshop.domain.exceptions import UnsupportedWeightError, ValidationError
from icecreamshop.domain.model.flavor import Flavor
from icecreamshop.domain.model.people import DeliveryDriver, User
from icecreamshop.domain.model.pricing import DEFAULT_PRICES, PricingTable


# ── PricingTable ─────────────────────────────────────────────────────────────


class TestPricingTable:

    def test_defaults(self):
        table = PricingTable()
        assert table.prices == DEFAULT_PRICES

    def test_price_for_known_weight(self):
        assert PricingTable({500: 5}).price_for(500) == 5

    def test_unknown_weight_rejected(self):
        with pytest.raises(UnsupportedWeightError, match="Weight not available"):
            PricingTable({500: 5}).price_for(750)

    def test_free_tub_allowed(self):
        assert PricingTable({100: 0}).price_for(100) == 0

    @pytest.mark.parametrize("prices", [{0: 3}, {-250: 3}, {250: -1}])
    def test_invalid_entries_rejected(self, prices):
        with pytest.raises(ValidationError):
            PricingTable(prices)

    def test_source_dict_changes_do_not_leak_in(self):
        source = {250: 3}
        table = PricingTable(source)
        source[250] = 100
        assert table.price_for(250) == 3


# ── Flavor ───────────────────────────────────────────────────────────────────


class TestFlavor:

    def test_create_strips_fields(self):
        flavor = Flavor.create(" ddl ", "Dulce de leche", "Dulce de leches")
        assert flavor == Flavor(id="ddl", name="Dulce de leche", category="Dulce de leches")

    @pytest.mark.parametrize(
        "fields,message",
        [
            (("", "n", "c"), "Flavor id is required"),
            (("x", " ", "c"), "Flavor name is required"),
            (("x", "n", ""), "Flavor type is required"),
        ],
    )
    def test_blank_fields_rejected(self, fields, message):
        with pytest.raises(ValidationError, match=message):
            Flavor.create(*fields)


# ── Users and drivers ────────────────────────────────────────────────────────


class TestUser:

    def test_create(self):
        user = User.create("a@b.com", "Ana", "Diaz")
        assert user.id is None
        assert user.email == "a@b.com"

    def test_email_required(self):
        with pytest.raises(ValidationError, match="Email is required"):
            User.create("", "Ana", "Diaz")


class TestDeliveryDriver:

    def test_create(self):
        driver = DeliveryDriver.create(2, "20123456789", 30, ["AB123CD"])
        assert driver.vehicles == ["AB123CD"]

    def test_short_cuil_rejected(self):
        with pytest.raises(ValidationError, match="Cuil"):
            DeliveryDriver.create(2, "123", 30, ["AB123CD"])

    def test_minor_rejected(self):
        with pytest.raises(ValidationError, match="18"):
            DeliveryDriver.create(2, "20123456789", 17, ["AB123CD"])

    def test_needs_a_vehicle(self):
        with pytest.raises(ValidationError, match="at least one vehicle"):
            DeliveryDriver.create(2, "20123456789", 30, [])

    def test_vehicle_id_length(self):
        with pytest.raises(ValidationError, match="Vehicle id"):
            DeliveryDriver.create(2, "20123456789", 30, ["AB1"])
