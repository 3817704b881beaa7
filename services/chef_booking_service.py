from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from pymongo.database import Database

from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import BookingStatus, MessageType, UserRole
from domain.mappers import UserMapper, serialize_document, serialize_value
from domain.schemas.booking_schemas import BookChefRequest, GeneralRequestCreate
from repositories import BookingRepository, UserRepository, parse_object_id
from services import pricing

logger = logging.getLogger("foodfly.chef_services")

DEFAULT_CUISINE = ["Indian"]
PLACEHOLDER_PHONE = "+91-0000000000"

DIRECT_REQUIRED = {
    "chef_id": "Chef ID is required",
    "event_type": "Event type is required",
    "event_date": "Event date is required",
    "event_time": "Event time is required",
    "duration": "Duration is required",
    "guest_count": "Guest count is required",
    "venue": "Venue details are required",
}
GENERAL_REQUIRED = {
    "event_type": "Event type is required",
    "event_date": "Event date is required",
    "event_time": "Event time is required",
    "duration": "Duration is required",
    "guest_count": "Guest count is required",
    "venue": "Venue details are required",
    "budget": "Budget is required",
}
ADDRESS_REQUIRED = {
    "street": "Street address is required",
    "city": "City is required",
    "state": "State is required",
    "zip_code": "Zip code is required",
}


def _missing(payload, required: Dict[str, str]) -> Dict[str, str]:
    return {
        field: message
        for field, message in required.items()
        if not getattr(payload, field, None)
    }


def normalise_cuisine(cuisine) -> List[str]:
    """Missing or empty -> ["Indian"]; a single string becomes a one-item list"""
    if not cuisine:
        return list(DEFAULT_CUISINE)
    if isinstance(cuisine, str):
        return [cuisine]
    return list(cuisine)


def _system_message(sender: str, text: str) -> Dict[str, Any]:
    return {
        "from": sender,
        "message": text,
        "timestamp": datetime.utcnow(),
        "type": MessageType.SYSTEM_UPDATE.value,
    }


def _chef_snapshot(chef: Dict[str, Any]) -> Dict[str, Any]:
    profile = chef.get("chef_profile") or {}
    return {
        "id": str(chef["_id"]),
        "name": chef.get("name"),
        "email": chef.get("email"),
        "phone": chef.get("phone") or PLACEHOLDER_PHONE,
        "specialization": profile.get("specialization") or [],
        "rating": profile.get("rating") or 5.0,
    }


def _customer_snapshot(customer: Dict[str, Any]) -> Dict[str, Any]:
    snapshot = UserMapper.to_snapshot(customer)
    snapshot["id"] = str(customer["_id"])
    snapshot["phone"] = snapshot.get("phone") or PLACEHOLDER_PHONE
    return snapshot


def _booking_details(payload, cuisine: List[str]) -> Dict[str, Any]:
    venue = payload.venue
    address = venue.address.model_dump() if venue.address else {}
    return {
        "event_type": payload.event_type,
        "event_date": payload.event_date,
        "event_time": payload.event_time,
        "duration": payload.duration,
        "guest_count": payload.guest_count,
        "special_requests": payload.special_requests or "",
        "dietary_restrictions": [d.lower() for d in payload.dietary_restrictions],
        "cuisine": cuisine,
        "venue": {"type": venue.type or "customer_home", "address": address},
    }


def _metadata(request_meta: Optional[Dict[str, Any]], request_type: str) -> Dict[str, Any]:
    request_meta = request_meta or {}
    return {
        "source": "web",
        "request_type": request_type,
        "ip_address": request_meta.get("ip_address") or "unknown",
        "user_agent": request_meta.get("user_agent") or "unknown",
    }


class ChefBookingService:
    # ------------------ Chef catalogue ------------------
    @staticmethod
    def list_chefs(
        db: Database,
        search: Optional[str] = None,
        city: Optional[str] = None,
        cuisine: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Active chefs plus the filter facets (cities and cuisines) over all of them.

        ``search`` matches name, specialization or signature dishes; ``city``
        matches a service area; price bounds apply to the chef's price range.
        """
        chefs = [
            c
            for c in UserRepository(db).list_by_role(
                UserRole.CHEF, {"chef_profile.is_active": {"$ne": False}}
            )
        ]
        cities, cuisines = set(), set()
        for chef in chefs:
            profile = chef.get("chef_profile") or {}
            location = profile.get("location") or {}
            cities.update(location.get("service_areas") or [])
            if location.get("city"):
                cities.add(location["city"])
            cuisines.update(profile.get("specialization") or [])

        def matches(chef: Dict[str, Any]) -> bool:
            profile = chef.get("chef_profile") or {}
            specialization = profile.get("specialization") or []
            if search:
                needle = search.lower()
                dishes = (profile.get("portfolio") or {}).get("signature_dishes") or []
                haystack = [chef.get("name") or ""] + specialization + dishes
                if not any(needle in s.lower() for s in haystack):
                    return False
            if city and city not in ((profile.get("location") or {}).get("service_areas") or []):
                return False
            if cuisine and cuisine not in specialization:
                return False
            price_range = profile.get("price_range") or {}
            if min_price is not None and (price_range.get("min") or 0) < min_price:
                return False
            if max_price is not None and (price_range.get("max") or 0) > max_price:
                return False
            return True

        return {
            "chefs": [UserMapper.to_chef_card(c) for c in chefs if matches(c)],
            "filters": {"cities": sorted(cities), "cuisines": sorted(cuisines)},
        }

    # ------------------ Direct booking ------------------
    @staticmethod
    def book_chef(
        db: Database,
        customer_id: str,
        payload: BookChefRequest,
        request_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Book a specific chef for an event.

        Raises:
            ServiceValidationError: missing fields, incomplete venue address, chef without phone
            NotFoundError: chef or customer not found
            ConflictError: chef already has an active booking that calendar day
        """
        missing = _missing(payload, DIRECT_REQUIRED)
        if missing:
            raise ServiceValidationError(
                "Missing required booking details. Please ensure all fields are filled.",
                details=missing,
            )
        address = payload.venue.address
        address_missing = (
            {"address": "Address object is required"}
            if address is None
            else _missing(address, ADDRESS_REQUIRED)
        )
        if address_missing:
            raise ServiceValidationError(
                "Invalid venue details. Please provide complete address information.",
                details=address_missing,
            )
        cuisine = normalise_cuisine(payload.cuisine)

        user_repo = UserRepository(db)
        booking_repo = BookingRepository(db)
        chef_oid = parse_object_id(payload.chef_id, "chef")
        chef = user_repo.get_with_role(chef_oid, UserRole.CHEF)
        if not chef:
            raise NotFoundError("Chef not found or not available")
        if not chef.get("phone"):
            raise ServiceValidationError(
                "Chef phone number is required. Please contact the chef to update their profile."
            )
        customer = user_repo.get_by_id(parse_object_id(customer_id, "user"))
        if not customer:
            raise NotFoundError("Customer not found")
        if not customer.get("phone"):
            logger.info("booking_without_customer_phone customer_id=%s", customer_id)

        chef_id = str(chef["_id"])
        if booking_repo.find_day_conflict(chef_id, payload.event_date):
            raise ConflictError("Chef is already booked for this date")

        quote = pricing.price_direct_booking(
            ((chef.get("chef_profile") or {}).get("price_range") or {}).get("min"),
            payload.duration,
            payload.guest_count,
            payload.venue.type,
        )
        now = datetime.utcnow()
        booking = booking_repo.create(
            {
                "customer_id": customer_id,
                "chef_id": chef_id,
                "booking_details": _booking_details(payload, cuisine),
                "pricing": quote,
                "status": BookingStatus.PENDING.value,
                "payment": {"method": payload.payment_method or "cod", "status": "pending"},
                "chef": _chef_snapshot(chef),
                "customer": _customer_snapshot(customer),
                "timeline": {"booked_at": now},
                "communication": {
                    "messages": [
                        _system_message(
                            "customer",
                            f"Booking request for {payload.event_type} on "
                            f"{payload.event_date.date().isoformat()}",
                        )
                    ]
                },
                "metadata": _metadata(request_meta, "direct"),
                "created_at": now,
                "updated_at": now,
            }
        )
        user_repo.increment_chef_events(chef["_id"])
        logger.info(
            "booking_created booking_id=%s chef_id=%s customer_id=%s total=%s",
            booking["_id"],
            chef_id,
            customer_id,
            quote["total_amount"],
        )
        return serialize_document(booking)

    @staticmethod
    def list_my_bookings(
        db: Database,
        user_id: str,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ):
        repo = BookingRepository(db)
        bookings = repo.list_for_participant(
            user_id, status=status, skip=(page - 1) * limit, limit=limit
        )
        return [serialize_document(b) for b in bookings], repo.count_for_participant(
            user_id, status=status
        )

    @staticmethod
    def list_customer_bookings(db: Database, customer_id: str) -> List[Dict[str, Any]]:
        return [
            serialize_document(b)
            for b in BookingRepository(db).list_for_customer(customer_id)
        ]

    # ------------------ General requests ------------------
    @staticmethod
    def create_general_request(
        db: Database,
        customer_id: str,
        payload: GeneralRequestCreate,
        request_meta: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Open a request that any chef can accept.

        Raises:
            ServiceValidationError: missing fields, no cuisine, customer without phone, past date
            NotFoundError: customer not found
        """
        missing = _missing(payload, GENERAL_REQUIRED)
        if missing:
            raise ServiceValidationError(
                "Missing required booking details", details=missing
            )
        if not isinstance(payload.cuisine, list) or not payload.cuisine:
            raise ServiceValidationError("Please select at least one cuisine")

        customer = UserRepository(db).get_by_id(parse_object_id(customer_id, "user"))
        if not customer:
            raise NotFoundError("Customer not found")
        if not customer.get("phone"):
            raise ServiceValidationError(
                "Customer phone number is required. Please update your profile."
            )
        now = datetime.utcnow()
        if payload.event_date <= now:
            raise ServiceValidationError("Event date must be in the future")

        budget = payload.budget
        quote = pricing.price_general_request(
            budget.min,
            budget.max,
            budget.is_flexible,
            payload.guest_count,
            payload.venue.type,
        )
        request = BookingRepository(db).create(
            {
                "customer_id": customer_id,
                "chef_id": None,
                "booking_details": _booking_details(payload, list(payload.cuisine)),
                "pricing": quote,
                "status": BookingStatus.PENDING_CHEF_ASSIGNMENT.value,
                "payment": {"method": payload.payment_method or "cod", "status": "pending"},
                "chef": None,
                "customer": _customer_snapshot(customer),
                "timeline": {"booked_at": now},
                "communication": {
                    "messages": [
                        _system_message(
                            "customer",
                            f"General request for {payload.event_type} on "
                            f"{payload.event_date.date().isoformat()} - Budget: "
                            f"₹{budget.min:g}-{budget.max:g}",
                        )
                    ]
                },
                "metadata": _metadata(request_meta, "general"),
                "created_at": now,
                "updated_at": now,
            }
        )
        logger.info(
            "general_request_created request_id=%s customer_id=%s budget_max=%s",
            request["_id"],
            customer_id,
            budget.max,
        )
        return serialize_document(request)

    @staticmethod
    def list_general_requests(db: Database) -> List[Dict[str, Any]]:
        """Unassigned requests for the chef dashboard, newest first"""
        out = []
        for request in BookingRepository(db).list_open_general_requests():
            details = request.get("booking_details") or {}
            out.append(
                {
                    "id": str(request["_id"]),
                    "event_type": details.get("event_type"),
                    "event_date": serialize_value(details.get("event_date")),
                    "event_time": details.get("event_time"),
                    "duration": details.get("duration"),
                    "guest_count": details.get("guest_count"),
                    "cuisine": details.get("cuisine"),
                    "venue": details.get("venue"),
                    "budget_range": request["pricing"].get("budget_range"),
                    "estimated_total_amount": request["pricing"].get("total_amount"),
                    "customer": request.get("customer"),
                    "special_requests": details.get("special_requests"),
                    "dietary_restrictions": details.get("dietary_restrictions"),
                    "booked_at": serialize_value(request["timeline"].get("booked_at")),
                }
            )
        return out

    @staticmethod
    def accept_request(
        db: Database,
        chef_id: str,
        request_id: str,
        final_price: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Claim a general request for ``chef_id``.

        The claim is one conditional update, so among concurrent acceptors
        exactly one succeeds.

        Raises:
            NotFoundError: unknown request or chef
            ConflictError: request already taken by another chef
        """
        request_oid = parse_object_id(request_id, "request")
        user_repo = UserRepository(db)
        chef = user_repo.get_with_role(parse_object_id(chef_id, "chef"), UserRole.CHEF)
        if not chef:
            raise NotFoundError("Chef not found")

        now = datetime.utcnow()
        changes: Dict[str, Any] = {
            "status": BookingStatus.CONFIRMED.value,
            "timeline.confirmed_at": now,
            "chef": _chef_snapshot(chef),
            "updated_at": now,
        }
        if final_price is not None:
            changes["pricing.total_amount"] = final_price
        booking_repo = BookingRepository(db)
        booking = booking_repo.claim_general_request(
            request_oid,
            chef_id,
            changes,
            _system_message("chef", f"Chef {chef.get('name')} has accepted your request!"),
        )
        if booking is None:
            if booking_repo.exists(request_oid):
                logger.info(
                    "general_request_lost request_id=%s chef_id=%s", request_id, chef_id
                )
                raise ConflictError("Request already accepted by another chef")
            raise NotFoundError("Request not found")

        user_repo.increment_chef_events(chef["_id"])
        logger.info("general_request_accepted request_id=%s chef_id=%s", request_id, chef_id)
        return serialize_document(booking)

    # ------------------ Notifications ------------------
    @staticmethod
    def chef_notifications(db: Database, chef_id: str) -> List[Dict[str, Any]]:
        """Open general requests and the chef's own upcoming bookings, newest first (max 20)."""
        repo = BookingRepository(db)
        notifications = []
        for req in repo.list_open_general_requests(limit=10):
            details = req.get("booking_details") or {}
            budget = (req.get("pricing") or {}).get("budget_range") or {}
            notifications.append(
                {
                    "id": f"general_{req['_id']}",
                    "type": "booking_request",
                    "title": "New General Chef Request",
                    "message": (
                        f"{details.get('event_type') or 'Event'} • "
                        f"{details.get('guest_count') or 0} guests • "
                        f"Budget ₹{budget.get('min') or 0:g}-₹{budget.get('max') or 0:g}"
                    ),
                    "timestamp": (req.get("timeline") or {}).get("booked_at") or datetime.utcnow(),
                    "is_read": False,
                    "event_id": str(req["_id"]),
                }
            )
        for req in repo.list_chef_upcoming(chef_id, limit=10):
            details = req.get("booking_details") or {}
            event_date = details.get("event_date")
            notifications.append(
                {
                    "id": f"assigned_{req['_id']}",
                    "type": "booking_request",
                    "title": (
                        "New Booking Assigned"
                        if req.get("status") == BookingStatus.PENDING.value
                        else "Upcoming Confirmed Event"
                    ),
                    "message": (
                        f"{details.get('event_type') or 'Event'} with "
                        f"{(req.get('customer') or {}).get('name') or 'Customer'} on "
                        f"{event_date.date().isoformat() if event_date else 'TBD'}"
                    ),
                    "timestamp": (req.get("timeline") or {}).get("booked_at") or datetime.utcnow(),
                    "is_read": False,
                    "event_id": str(req["_id"]),
                }
            )
        notifications.sort(key=lambda n: n["timestamp"], reverse=True)
        return [serialize_value(n) for n in notifications[:20]]
