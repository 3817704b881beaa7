"""
Chef booking price estimates.

All amounts are INR. A direct booking is priced from the chef's minimum
hourly rate; a general request is priced from the customer's budget.
"""

from typing import Any, Dict, Optional

from domain.enums import VenueType

CURRENCY = "INR"
DEFAULT_HOURLY_RATE = 2000
EXTRA_GUEST_THRESHOLD = 10
EXTRA_GUEST_CHARGE = 200
TRAVEL_FEE = 500
EQUIPMENT_GUEST_THRESHOLD = 20
EQUIPMENT_RENTAL = 1000
GENERAL_BUDGET_SHARE = 0.7
GENERAL_BASE_CAP = 5000


def additional_charges(guest_count: int, venue_type: Optional[str]) -> Dict[str, float]:
    charges = {
        "ingredient_cost": 0,
        "travel_fee": 0,
        "equipment_rental": 0,
        "extra_hours": 0,
    }
    if guest_count > EXTRA_GUEST_THRESHOLD:
        charges["extra_hours"] = (guest_count - EXTRA_GUEST_THRESHOLD) * EXTRA_GUEST_CHARGE
    if venue_type == VenueType.CUSTOMER_HOME.value:
        charges["travel_fee"] = TRAVEL_FEE
    if guest_count > EQUIPMENT_GUEST_THRESHOLD:
        charges["equipment_rental"] = EQUIPMENT_RENTAL
    return charges


def _pricing(base_price: float, charges: Dict[str, float]) -> Dict[str, Any]:
    return {
        "base_price": base_price,
        "additional_charges": charges,
        "total_amount": base_price + sum(charges.values()),
        "currency": CURRENCY,
    }


def price_direct_booking(
    hourly_min: Optional[float],
    duration: float,
    guest_count: int,
    venue_type: Optional[str],
) -> Dict[str, Any]:
    """Base is the chef's minimum rate (2000 when unset) times the duration in hours."""
    base = (hourly_min or DEFAULT_HOURLY_RATE) * duration
    return _pricing(base, additional_charges(guest_count, venue_type))


def price_general_request(
    budget_min: float,
    budget_max: float,
    is_flexible: bool,
    guest_count: int,
    venue_type: Optional[str],
) -> Dict[str, Any]:
    """Base is 70% of the maximum budget, capped at 5000."""
    base = min(budget_max * GENERAL_BUDGET_SHARE, GENERAL_BASE_CAP)
    pricing = _pricing(base, additional_charges(guest_count, venue_type))
    pricing["budget_range"] = {
        "min": budget_min,
        "max": budget_max,
        "is_flexible": bool(is_flexible),
    }
    return pricing
