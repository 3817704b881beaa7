"""
Tests for server-side carts (guest and signed-in).

Rules covered:
- a cart holds items from a single restaurant; switching restaurants starts over
- the same item with the same customizations merges by quantity
- quantity 0 removes an item
- a guest cart is adopted on sign-in only when the user's cart is empty
"""

import pytest

from repositories import CartRepository, guest_owner, user_owner
from services.cart_service import CartService
from test_fixtures import auth_headers, catalog_db, client, db, make_user

GUEST = {"X-Cart-Token": "guest-token-1"}


def test_cart_requires_identity(catalog_db):
    response = client.get("/cart")
    assert response.status_code == 400
    assert "X-Cart-Token" in response.json()["error"]


def test_empty_cart(catalog_db):
    response = client.get("/cart", headers=GUEST)

    assert response.status_code == 200
    assert response.json()["data"] == {
        "restaurant_id": None,
        "restaurant_name": None,
        "items": [],
        "subtotal": 0,
        "total_items": 0,
    }


def test_add_items_and_merge_same_item(catalog_db):
    client.post("/cart", json={"menu_item_id": "chicken-biryani", "quantity": 2}, headers=GUEST)
    client.post("/cart", json={"menu_item_id": "panache-dal-makhani"}, headers=GUEST)
    response = client.post(
        "/cart", json={"menu_item_id": "chicken-biryani"}, headers=GUEST
    )

    cart = response.json()["data"]
    assert cart["restaurant_id"] == "1"
    assert cart["restaurant_name"] == "Panache"
    assert len(cart["items"]) == 2
    biryani = next(i for i in cart["items"] if i["menu_item_id"] == "chicken-biryani")
    assert biryani["quantity"] == 3
    assert cart["total_items"] == 4
    assert cart["subtotal"] == 3 * 250 + 180


def test_different_customizations_are_separate_lines(catalog_db):
    owner = guest_owner("custom")
    CartService.add_item(catalog_db, owner, "chicken-biryani", 1, ["extra raita"])
    cart = CartService.add_item(catalog_db, owner, "chicken-biryani", 1, [])

    assert len(cart["items"]) == 2


def test_switching_restaurant_starts_new_cart(catalog_db):
    client.post("/cart", json={"menu_item_id": "chicken-biryani"}, headers=GUEST)
    response = client.post("/cart", json={"menu_item_id": "garlic-bread"}, headers=GUEST)

    cart = response.json()["data"]
    assert cart["restaurant_id"] == "2"
    assert [i["menu_item_id"] for i in cart["items"]] == ["garlic-bread"]


def test_unknown_menu_item(catalog_db):
    response = client.post("/cart", json={"menu_item_id": "unicorn-steak"}, headers=GUEST)
    assert response.status_code == 404


def test_update_quantity_and_remove(catalog_db):
    client.post("/cart", json={"menu_item_id": "chicken-biryani"}, headers=GUEST)
    client.post("/cart", json={"menu_item_id": "panache-shahi-paneer"}, headers=GUEST)

    response = client.put(
        "/cart/items/chicken-biryani", json={"quantity": 4}, headers=GUEST
    )
    assert response.json()["data"]["total_items"] == 5

    response = client.put(
        "/cart/items/chicken-biryani", json={"quantity": 0}, headers=GUEST
    )
    assert [i["menu_item_id"] for i in response.json()["data"]["items"]] == [
        "panache-shahi-paneer"
    ]

    response = client.delete("/cart/items/panache-shahi-paneer", headers=GUEST)
    cart = response.json()["data"]
    assert cart["items"] == []
    assert cart["restaurant_id"] is None


def test_update_item_not_in_cart(catalog_db):
    response = client.put("/cart/items/chicken-biryani", json={"quantity": 2}, headers=GUEST)
    assert response.status_code == 404


def test_negative_quantity_is_rejected(catalog_db):
    client.post("/cart", json={"menu_item_id": "chicken-biryani"}, headers=GUEST)
    response = client.put("/cart/items/chicken-biryani", json={"quantity": -1}, headers=GUEST)
    assert response.status_code == 422


def test_clear_cart(catalog_db):
    client.post("/cart", json={"menu_item_id": "chicken-biryani"}, headers=GUEST)
    response = client.delete("/cart", headers=GUEST)

    assert response.json()["data"]["items"] == []
    assert CartRepository(catalog_db).get_by_owner(guest_owner("guest-token-1")) is None


def test_signed_in_user_cart_is_keyed_by_user(catalog_db):
    user = make_user(catalog_db)
    client.post("/cart", json={"menu_item_id": "fattoush"}, headers=auth_headers(user))

    cart = CartRepository(catalog_db).get_by_owner(user_owner(str(user["_id"])))
    assert cart["items"][0]["menu_item_id"] == "fattoush"


# =============================================================================
# GUEST CART ADOPTION
# =============================================================================


def test_adopt_into_empty_user_cart(catalog_db):
    guest, user = guest_owner("g1"), user_owner("u1")
    CartService.add_item(catalog_db, guest, "chicken-biryani", 2)

    assert CartService.adopt_guest_cart(catalog_db, guest, user) is True
    assert CartService.get_cart(catalog_db, user)["total_items"] == 2
    assert CartRepository(catalog_db).get_by_owner(guest) is None


def test_adopt_keeps_existing_user_cart(catalog_db):
    guest, user = guest_owner("g2"), user_owner("u2")
    CartService.add_item(catalog_db, guest, "chicken-biryani", 2)
    CartService.add_item(catalog_db, user, "garlic-bread", 1)

    assert CartService.adopt_guest_cart(catalog_db, guest, user) is False
    items = CartService.get_cart(catalog_db, user)["items"]
    assert [i["menu_item_id"] for i in items] == ["garlic-bread"]
    assert CartRepository(catalog_db).get_by_owner(guest) is None


def test_adopt_without_guest_cart(catalog_db):
    assert CartService.adopt_guest_cart(catalog_db, guest_owner("none"), user_owner("u3")) is False
