"""User profile and address book routes"""

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
import logging
from typing import Any, Dict

from api.dependencies import get_current_user, get_db
from api.responses import success_response
from domain.schemas.user_schemas import AddressCreate, AddressUpdate, ProfileUpdateRequest
from repositories import parse_object_id
from services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger("foodfly.api.users")


def _uid(user: Dict[str, Any]):
    return parse_object_id(user["user_id"], "user")


@router.get("/profile")
def get_profile(
    user: Dict[str, Any] = Depends(get_current_user), db: Database = Depends(get_db)
):
    return success_response(UserService.get_profile(db, _uid(user)))


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    profile = UserService.update_profile(db, _uid(user), payload.name, payload.phone)
    return success_response(profile, "Profile updated")


@router.get("/addresses")
def list_addresses(
    user: Dict[str, Any] = Depends(get_current_user), db: Database = Depends(get_db)
):
    return success_response(UserService.list_addresses(db, _uid(user)))


@router.post("/addresses", status_code=status.HTTP_201_CREATED)
def add_address(
    payload: AddressCreate,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Add an address; the first one saved becomes the default"""
    addresses = UserService.add_address(db, _uid(user), payload)
    return success_response(addresses, "Address added")


@router.put("/addresses/{address_id}")
def update_address(
    address_id: str,
    payload: AddressUpdate,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    addresses = UserService.update_address(db, _uid(user), address_id, payload)
    return success_response(addresses, "Address updated")


@router.delete("/addresses/{address_id}")
def delete_address(
    address_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    addresses = UserService.delete_address(db, _uid(user), address_id)
    return success_response(addresses, "Address deleted")


@router.put("/addresses/{address_id}/default")
def set_default_address(
    address_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    addresses = UserService.set_default_address(db, _uid(user), address_id)
    return success_response(addresses, "Default address updated")
