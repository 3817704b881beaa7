"""
Tests for the caller's profile and address book.

Address book rules:
- the first address becomes the default
- adding or marking a default clears the flag on the others
- the default cannot be unset directly; deleting it promotes the first remaining address
"""

import pytest

from test_fixtures import auth_headers, client, db, make_user

HOME = {
    "label": "Home",
    "street": "4 Palm Grove, Bandra West",
    "city": "Mumbai",
    "state": "Maharashtra",
    "zip_code": "400050",
}
WORK = {
    "label": "Work",
    "street": "Level 9, One BKC",
    "city": "Mumbai",
    "state": "Maharashtra",
    "zip_code": "400051",
    "landmark": "Opp. Jio Garden",
}


@pytest.fixture
def customer(db):
    return make_user(db, name="Aditi Rao", password_hash="argon2-hash")


def _defaults(addresses):
    return [a["label"] for a in addresses if a["is_default"]]


# =============================================================================
# PROFILE
# =============================================================================


def test_get_profile_hides_credentials(customer):
    response = client.get("/users/profile", headers=auth_headers(customer))

    assert response.status_code == 200
    profile = response.json()["data"]
    assert profile["id"] == str(customer["_id"])
    assert profile["name"] == "Aditi Rao"
    assert "password_hash" not in profile
    assert "_id" not in profile


def test_update_profile(customer):
    response = client.put(
        "/users/profile",
        json={"name": "Aditi R.", "phone": "+91-9000012345"},
        headers=auth_headers(customer),
    )

    data = response.json()["data"]
    assert data["name"] == "Aditi R."
    assert data["phone"] == "+91-9000012345"


def test_empty_profile_update_is_rejected(customer):
    response = client.put("/users/profile", json={}, headers=auth_headers(customer))
    assert response.status_code == 400
    assert response.json()["error"] == "Nothing to update"


def test_profile_of_deleted_user(db, customer):
    headers = auth_headers(customer)
    db.users.delete_one({"_id": customer["_id"]})

    assert client.get("/users/profile", headers=headers).status_code == 404


# =============================================================================
# ADDRESSES
# =============================================================================


def test_first_address_becomes_default(customer):
    response = client.post("/users/addresses", json=HOME, headers=auth_headers(customer))

    assert response.status_code == 201
    addresses = response.json()["data"]
    assert len(addresses) == 1
    assert addresses[0]["is_default"] is True
    assert addresses[0]["address_id"]


def test_new_default_clears_previous(customer):
    headers = auth_headers(customer)
    client.post("/users/addresses", json=HOME, headers=headers)
    client.post("/users/addresses", json=WORK, headers=headers)
    assert _defaults(client.get("/users/addresses", headers=headers).json()["data"]) == ["Home"]

    response = client.post(
        "/users/addresses", json={**WORK, "label": "Gym", "is_default": True}, headers=headers
    )
    assert _defaults(response.json()["data"]) == ["Gym"]


def test_set_default_address(customer):
    headers = auth_headers(customer)
    client.post("/users/addresses", json=HOME, headers=headers)
    work = client.post("/users/addresses", json=WORK, headers=headers).json()["data"][1]

    response = client.put(f"/users/addresses/{work['address_id']}/default", headers=headers)
    assert _defaults(response.json()["data"]) == ["Work"]


def test_update_address_cannot_unset_default(customer):
    headers = auth_headers(customer)
    home = client.post("/users/addresses", json=HOME, headers=headers).json()["data"][0]

    response = client.put(
        f"/users/addresses/{home['address_id']}",
        json={"landmark": "Near Mount Carmel", "is_default": False},
        headers=headers,
    )
    address = response.json()["data"][0]
    assert address["landmark"] == "Near Mount Carmel"
    assert address["is_default"] is True


def test_update_address_ignores_nulls(customer):
    headers = auth_headers(customer)
    home = client.post("/users/addresses", json=HOME, headers=headers).json()["data"][0]

    response = client.put(
        f"/users/addresses/{home['address_id']}",
        json={"street": None, "is_default": None, "label": "Flat"},
        headers=headers,
    )

    address = response.json()["data"][0]
    assert address["label"] == "Flat"
    assert address["street"] == HOME["street"]
    assert address["is_default"] is True


def test_deleting_default_promotes_next(customer):
    headers = auth_headers(customer)
    home = client.post("/users/addresses", json=HOME, headers=headers).json()["data"][0]
    client.post("/users/addresses", json=WORK, headers=headers)

    response = client.delete(f"/users/addresses/{home['address_id']}", headers=headers)

    addresses = response.json()["data"]
    assert [a["label"] for a in addresses] == ["Work"]
    assert addresses[0]["is_default"] is True


def test_unknown_address(customer):
    headers = auth_headers(customer)
    assert client.delete("/users/addresses/missing", headers=headers).status_code == 404
    assert client.put("/users/addresses/missing/default", headers=headers).status_code == 404


def test_address_validation(customer):
    response = client.post(
        "/users/addresses", json={**HOME, "zip_code": "1"}, headers=auth_headers(customer)
    )
    assert response.status_code == 422
