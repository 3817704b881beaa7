"""
Tests for checkout and order lifecycle.

Totals: subtotal from catalogue prices, restaurant delivery fee, 5% tax.
Order numbers: "FF" + yyMMddHHmmss + 4 digits.
Customers may cancel while an order is placed or confirmed and review once
it is delivered.
"""

import re
from datetime import datetime

import pytest

from services.order_service import compute_totals, generate_order_number
from test_fixtures import (
    auth_headers,
    catalog_db,
    client,
    db,
    make_order,
    make_user,
    venue,
)

ADDRESS = venue()["address"]


# =============================================================================
# PURE HELPERS
# =============================================================================


def test_compute_totals():
    assert compute_totals(500, 40) == {
        "subtotal": 500,
        "delivery_fee": 40,
        "taxes": 25.0,
        "total_amount": 565.0,
    }


def test_order_number_format():
    number = generate_order_number(datetime(2025, 3, 4, 5, 6, 7))
    assert re.fullmatch(r"FF250304050607\d{4}", number)


# =============================================================================
# PLACING ORDERS
# =============================================================================


def test_place_order_with_explicit_items(catalog_db):
    customer = make_user(catalog_db)

    response = client.post(
        "/orders",
        json={
            "items": [{"menu_item_id": "chicken-biryani", "quantity": 2}],
            "delivery_address": ADDRESS,
            "special_instructions": "Ring twice",
        },
        headers=auth_headers(customer),
    )

    assert response.status_code == 201
    order = response.json()["data"]
    assert order["status"] == "placed"
    assert order["payment_method"] == "cod"
    assert order["payment_status"] == "pending"
    assert order["subtotal"] == 500
    assert order["delivery_fee"] == 40
    assert order["taxes"] == 25.0
    assert order["total_amount"] == 565.0
    assert order["restaurant"]["name"] == "Panache"
    assert order["items"][0]["menu_item"]["name"] == "Chicken Biryani"
    assert order["items"][0]["quantity"] == 2
    assert re.fullmatch(r"FF\d{16}", order["order_number"])
    assert order["estimated_delivery_time"] is not None


def test_place_order_from_cart_empties_cart(catalog_db):
    customer = make_user(catalog_db)
    headers = auth_headers(customer)
    client.post("/cart", json={"menu_item_id": "garlic-bread", "quantity": 2}, headers=headers)
    client.post("/cart", json={"menu_item_id": "fattoush"}, headers=headers)

    response = client.post("/orders", json={"delivery_address": ADDRESS}, headers=headers)

    assert response.status_code == 201
    order = response.json()["data"]
    assert order["restaurant"]["id"] == "2"
    assert order["subtotal"] == 2 * 299 + 395
    assert client.get("/cart", headers=headers).json()["data"]["items"] == []


def test_empty_cart_cannot_be_ordered(catalog_db):
    customer = make_user(catalog_db)
    response = client.post(
        "/orders", json={"delivery_address": ADDRESS}, headers=auth_headers(customer)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Order must contain at least one item"


def test_items_from_two_restaurants_are_rejected(catalog_db):
    customer = make_user(catalog_db)
    response = client.post(
        "/orders",
        json={
            "items": [
                {"menu_item_id": "chicken-biryani"},
                {"menu_item_id": "garlic-bread"},
            ],
            "delivery_address": ADDRESS,
        },
        headers=auth_headers(customer),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "All items must come from the same restaurant"


def test_unknown_items_are_listed(catalog_db):
    customer = make_user(catalog_db)
    response = client.post(
        "/orders",
        json={"items": [{"menu_item_id": "ghost-pepper-pie"}], "delivery_address": ADDRESS},
        headers=auth_headers(customer),
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"menu_item_ids": ["ghost-pepper-pie"]}


def test_address_is_required(catalog_db):
    customer = make_user(catalog_db)
    response = client.post(
        "/orders",
        json={"items": [{"menu_item_id": "chicken-biryani"}]},
        headers=auth_headers(customer),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Delivery address is required"


def test_saved_address_can_be_used(catalog_db):
    customer = make_user(catalog_db)
    headers = auth_headers(customer)
    addresses = client.post(
        "/users/addresses", json={**ADDRESS, "label": "Work"}, headers=headers
    ).json()["data"]

    response = client.post(
        "/orders",
        json={
            "items": [{"menu_item_id": "chicken-biryani"}],
            "address_id": addresses[0]["address_id"],
        },
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["delivery_address"]["street"] == ADDRESS["street"]


def test_unknown_saved_address(catalog_db):
    customer = make_user(catalog_db)
    response = client.post(
        "/orders",
        json={"items": [{"menu_item_id": "chicken-biryani"}], "address_id": "nope"},
        headers=auth_headers(customer),
    )
    assert response.status_code == 404


def test_placing_an_order_requires_login(catalog_db):
    response = client.post("/orders", json={"delivery_address": ADDRESS})
    assert response.status_code == 401


# =============================================================================
# READING ORDERS
# =============================================================================


def test_list_orders_is_paginated_and_scoped(catalog_db):
    customer, other = make_user(catalog_db), make_user(catalog_db)
    make_order(catalog_db, customer)
    make_order(catalog_db, customer, status="delivered")
    make_order(catalog_db, other)

    response = client.get("/orders?limit=1", headers=auth_headers(customer))
    page = response.json()["data"]
    assert page["total"] == 2
    assert page["total_pages"] == 2
    assert page["has_next"] is True
    assert len(page["items"]) == 1

    delivered = client.get("/orders?status=delivered", headers=auth_headers(customer))
    assert delivered.json()["data"]["total"] == 1


def test_order_detail_is_owner_or_admin_only(catalog_db):
    customer, stranger = make_user(catalog_db), make_user(catalog_db)
    admin = make_user(catalog_db, role="admin")
    order = make_order(catalog_db, customer)
    url = f"/orders/{order['_id']}"

    assert client.get(url, headers=auth_headers(customer)).status_code == 200
    assert client.get(url, headers=auth_headers(admin)).status_code == 200
    response = client.get(url, headers=auth_headers(stranger))
    assert response.status_code == 403


def test_order_lookup_errors(catalog_db):
    customer = make_user(catalog_db)
    headers = auth_headers(customer)

    malformed = client.get("/orders/not-an-id", headers=headers)
    assert malformed.status_code == 400
    assert malformed.json()["error"] == "Invalid order ID format"

    missing = client.get("/orders/64b000000000000000000001", headers=headers)
    assert missing.status_code == 404


# =============================================================================
# CANCEL AND REVIEW
# =============================================================================


@pytest.mark.parametrize("status", ["placed", "confirmed"])
def test_cancel_allowed_before_preparation(catalog_db, status):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer, status=status)

    response = client.patch(
        f"/orders/{order['_id']}/cancel",
        json={"reason": "Ordered by mistake"},
        headers=auth_headers(customer),
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "cancelled"
    assert data["cancellation_reason"] == "Ordered by mistake"
    assert data["cancelled_at"] is not None


@pytest.mark.parametrize("status", ["preparing", "out_for_delivery", "delivered", "cancelled"])
def test_cancel_refused_later(catalog_db, status):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer, status=status)

    response = client.patch(
        f"/orders/{order['_id']}/cancel", json={}, headers=auth_headers(customer)
    )
    assert response.status_code == 409


def test_cancel_paid_online_order_is_refunded(catalog_db):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer, payment_method="online", payment_status="paid")

    response = client.patch(
        f"/orders/{order['_id']}/cancel", json={}, headers=auth_headers(customer)
    )
    assert response.json()["data"]["payment_status"] == "refunded"


def test_review_only_after_delivery(catalog_db):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer)

    response = client.patch(
        f"/orders/{order['_id']}/review", json={"rating": 5}, headers=auth_headers(customer)
    )
    assert response.status_code == 409


def test_review_delivered_order(catalog_db):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer, status="delivered")

    response = client.patch(
        f"/orders/{order['_id']}/review",
        json={"rating": 4, "review": "Hot and on time"},
        headers=auth_headers(customer),
    )
    data = response.json()["data"]
    assert data["rating"] == 4
    assert data["review"] == "Hot and on time"


def test_review_rating_bounds(catalog_db):
    customer = make_user(catalog_db)
    order = make_order(catalog_db, customer, status="delivered")

    response = client.patch(
        f"/orders/{order['_id']}/review", json={"rating": 6}, headers=auth_headers(customer)
    )
    assert response.status_code == 422
