"""
Tests for chef booking price estimates.

Direct bookings:  base = chef hourly minimum (2000 when unset) x hours
General requests: base = 70% of the budget maximum, capped at 5000
Both add: 200 per guest above 10, 500 travel at the customer's home,
1000 equipment rental above 20 guests.
"""

import pytest

from services.pricing import (
    additional_charges,
    price_direct_booking,
    price_general_request,
)


def test_direct_booking_small_party_at_home():
    quote = price_direct_booking(1500, 4, 8, "customer_home")

    assert quote["base_price"] == 6000
    assert quote["additional_charges"] == {
        "ingredient_cost": 0,
        "travel_fee": 500,
        "equipment_rental": 0,
        "extra_hours": 0,
    }
    assert quote["total_amount"] == 6500
    assert quote["currency"] == "INR"


def test_direct_booking_defaults_to_standard_hourly_rate():
    quote = price_direct_booking(None, 3, 4, "event_venue")

    assert quote["base_price"] == 6000
    assert quote["total_amount"] == 6000


def test_large_party_at_venue_pays_extra_guests_and_equipment():
    charges = additional_charges(25, "event_venue")

    assert charges["extra_hours"] == 15 * 200
    assert charges["equipment_rental"] == 1000
    assert charges["travel_fee"] == 0


@pytest.mark.parametrize(
    "guests,extra,equipment",
    [(10, 0, 0), (11, 200, 0), (20, 2000, 0), (21, 2200, 1000)],
)
def test_guest_thresholds(guests, extra, equipment):
    charges = additional_charges(guests, "other")
    assert charges["extra_hours"] == extra
    assert charges["equipment_rental"] == equipment


def test_general_request_base_is_capped():
    quote = price_general_request(6000, 10000, True, 12, "customer_home")

    # 70% of 10000 is 7000, capped at 5000; +400 extra guests, +500 travel
    assert quote["base_price"] == 5000
    assert quote["total_amount"] == 5900
    assert quote["budget_range"] == {"min": 6000, "max": 10000, "is_flexible": True}


def test_general_request_below_cap():
    quote = price_general_request(2000, 4000, False, 6, "event_venue")

    assert quote["base_price"] == pytest.approx(2800)
    assert quote["total_amount"] == pytest.approx(2800)
    assert quote["budget_range"]["is_flexible"] is False
