"""
Shared test fixtures and utilities for the FoodFly test suite.

This module holds the TestClient, an in-memory MongoDB (mongomock) wired in
through FastAPI's dependency overrides, and factories for users, chefs,
delivery partners, bookings and orders with realistic data.
"""

import itertools
import uuid
from datetime import datetime, timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from adapters import mongo_adapter
from api.dependencies import get_db
from main import app
from services.auth_service import create_access_token
from services.catalog_service import CatalogService

# The lifespan (real MongoDB connection) only runs inside a ``with`` block,
# so a plain TestClient never touches the network.
client = TestClient(app)


def unique_email(prefix: str = "test") -> str:
    """Generate unique email address using UUID to avoid conflicts"""
    return f"{prefix}-{uuid.uuid4().hex[:8]}@example.com"


REALISTIC_USERS = {
    "customer": {"name": "Priya Sharma", "email_prefix": "priya.sharma"},
    "chef": {"name": "Arjun Kapoor", "email_prefix": "chef.arjun"},
    "delivery": {"name": "Ravi Kumar", "email_prefix": "ravi.kumar"},
    "admin": {"name": "Meera Iyer", "email_prefix": "admin.meera"},
}


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def db():
    """
    Fresh in-memory database per test, injected into every route.

    Indexes are created so unique constraints (email, order number, cart
    owner) behave like production.
    """
    database = mongomock.MongoClient().foodfly_test
    mongo_adapter.ensure_indexes(database)
    app.dependency_overrides[get_db] = lambda: database
    try:
        yield database
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture(scope="function")
def catalog_db(db):
    """Database with the restaurant catalogue loaded"""
    CatalogService.seed(db)
    return db


# =============================================================================
# FACTORIES
# =============================================================================


def make_user(db, role="customer", name=None, email=None, phone="+91-9876543210", **extra):
    """
    Insert a user document and return it.

    Args:
        db: mongomock database
        role: customer | chef | delivery | admin
        name: defaults to a realistic name for the role
        email: auto-generated when not provided
        phone: pass None to create a user without a phone number
        **extra: additional top-level fields (password_hash, chef_profile, ...)

    Example:
        >>> customer = make_user(db)
        >>> customer["role"]
        'customer'
    """
    profile = REALISTIC_USERS.get(role, REALISTIC_USERS["customer"])
    now = datetime.utcnow()
    user = {
        "name": name or profile["name"],
        "email": email or unique_email(profile["email_prefix"]),
        "phone": phone,
        "role": role,
        "password_hash": None,
        "is_email_verified": True,
        "addresses": [],
        "created_at": now,
        "updated_at": now,
    }
    user.update(extra)
    user["_id"] = db.users.insert_one(user).inserted_id
    return user


def make_chef(
    db,
    name="Arjun Kapoor",
    specialization=("North Indian", "Mughlai"),
    price_min=1500,
    price_max=4000,
    city="Mumbai",
    service_areas=("Mumbai", "Thane"),
    availability="available",
    is_verified=False,
    rating=4.7,
    phone="+91-9820012345",
):
    """Chef with a realistic profile; hourly minimum 1500 INR by default"""
    return make_user(
        db,
        role="chef",
        name=name,
        phone=phone,
        chef_profile={
            "specialization": list(specialization),
            "experience_years": 8,
            "bio": "Private dining and festive menus",
            "price_range": {"min": price_min, "max": price_max},
            "rating": rating,
            "total_events": 0,
            "location": {"city": city, "service_areas": list(service_areas)},
            "portfolio": {"signature_dishes": ["Butter Chicken", "Galouti Kebab"]},
            "availability": {"status": availability},
            "verification": {"is_verified": is_verified},
            "is_active": True,
            "joined_at": datetime.utcnow(),
        },
    )


def make_partner(db, name="Ravi Kumar", status="online", is_verified=False, deliveries=0):
    return make_user(
        db,
        role="delivery",
        name=name,
        delivery_profile={
            "vehicle_type": "bike",
            "availability": {"status": status},
            "is_verified": is_verified,
            "is_active": True,
            "performance": {"completed_deliveries": deliveries},
        },
    )


def auth_headers(user):
    """Bearer header for a user document"""
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def future_date(days: int = 14) -> str:
    return (datetime.utcnow() + timedelta(days=days)).date().isoformat()


def venue(**overrides):
    address = {
        "street": "12 Carter Road",
        "city": "Mumbai",
        "state": "Maharashtra",
        "zip_code": "400050",
    }
    address.update(overrides)
    return {"type": "customer_home", "address": address}


def booking_payload(chef_id, **overrides):
    """Direct booking body: 4 hours, 8 guests, at the customer's home"""
    payload = {
        "chef_id": str(chef_id),
        "event_type": "Birthday Dinner",
        "event_date": future_date(),
        "event_time": "19:00",
        "duration": 4,
        "guest_count": 8,
        "cuisine": ["North Indian"],
        "venue": venue(),
        "dietary_restrictions": ["Vegetarian"],
    }
    payload.update(overrides)
    return payload


def general_request_payload(**overrides):
    """General request body with a 6000-10000 budget"""
    payload = {
        "event_type": "Anniversary Party",
        "event_date": future_date(21),
        "event_time": "20:00",
        "duration": 5,
        "guest_count": 12,
        "cuisine": ["Italian", "Continental"],
        "venue": venue(),
        "budget": {"min": 6000, "max": 10000, "is_flexible": True},
    }
    payload.update(overrides)
    return payload


_order_seq = itertools.count(1)


def make_order(db, customer, status="placed", payment_method="cod", payment_status="pending"):
    """Insert an order document directly, bypassing checkout"""
    now = datetime.utcnow()
    order = {
        "order_number": f"FF{now.strftime('%y%m%d%H%M%S')}{next(_order_seq):04d}",
        "customer_id": str(customer["_id"]),
        "restaurant_id": "1",
        "restaurant_name": "Panache",
        "items": [
            {
                "menu_item_id": "chicken-biryani",
                "name": "Chicken Biryani",
                "price": 250,
                "quantity": 2,
                "customizations": [],
            }
        ],
        "subtotal": 500,
        "delivery_fee": 40,
        "taxes": 25.0,
        "total_amount": 565.0,
        "status": status,
        "payment_method": payment_method,
        "payment_status": payment_status,
        "delivery_address": venue()["address"],
        "placed_at": now,
        "created_at": now,
        "updated_at": now,
    }
    order["_id"] = db.orders.insert_one(order).inserted_id
    return order
