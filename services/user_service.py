from typing import Any, Dict, List, Optional
from uuid import uuid4
import logging

from bson import ObjectId
from pymongo.database import Database

from app.exceptions import NotFoundError, ServiceValidationError
from domain.mappers import UserMapper
from domain.schemas.user_schemas import AddressCreate, AddressUpdate
from repositories import UserRepository

logger = logging.getLogger("foodfly.users")


class UserService:
    @staticmethod
    def get_user(db: Database, user_id: ObjectId) -> Dict[str, Any]:
        user = UserRepository(db).get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def get_profile(db: Database, user_id: ObjectId) -> Dict[str, Any]:
        return UserMapper.to_response(UserService.get_user(db, user_id))

    @staticmethod
    def update_profile(
        db: Database,
        user_id: ObjectId,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        changes = {k: v for k, v in {"name": name, "phone": phone}.items() if v is not None}
        if not changes:
            raise ServiceValidationError("Nothing to update")
        user = UserRepository(db).update(user_id, changes)
        if not user:
            raise NotFoundError("User not found")
        logger.info("profile_updated user_id=%s fields=%s", user_id, sorted(changes))
        return UserMapper.to_response(user)

    # ------------------ Addresses ------------------
    @staticmethod
    def list_addresses(db: Database, user_id: ObjectId) -> List[Dict[str, Any]]:
        return UserService.get_user(db, user_id).get("addresses") or []

    @staticmethod
    def _save(db: Database, user_id: ObjectId, addresses: List[Dict[str, Any]]):
        UserRepository(db).set_addresses(user_id, addresses)
        return addresses

    @staticmethod
    def add_address(
        db: Database, user_id: ObjectId, payload: AddressCreate
    ) -> List[Dict[str, Any]]:
        """
        Append an address.

        The first address always becomes the default; adding a default
        address clears the flag on the others.
        """
        addresses = UserService.list_addresses(db, user_id)
        address = payload.model_dump()
        address["address_id"] = uuid4().hex
        if not addresses:
            address["is_default"] = True
        if address["is_default"]:
            for other in addresses:
                other["is_default"] = False
        addresses.append(address)
        logger.info("address_added user_id=%s address_id=%s", user_id, address["address_id"])
        return UserService._save(db, user_id, addresses)

    @staticmethod
    def _find(addresses: List[Dict[str, Any]], address_id: str) -> Dict[str, Any]:
        for address in addresses:
            if address.get("address_id") == address_id:
                return address
        raise NotFoundError("Address not found")

    @staticmethod
    def update_address(
        db: Database, user_id: ObjectId, address_id: str, payload: AddressUpdate
    ) -> List[Dict[str, Any]]:
        addresses = UserService.list_addresses(db, user_id)
        address = UserService._find(addresses, address_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if changes.get("is_default") is False and address.get("is_default"):
            # the address book always keeps one default
            changes.pop("is_default")
        address.update(changes)
        if changes.get("is_default"):
            for other in addresses:
                if other is not address:
                    other["is_default"] = False
        return UserService._save(db, user_id, addresses)

    @staticmethod
    def delete_address(
        db: Database, user_id: ObjectId, address_id: str
    ) -> List[Dict[str, Any]]:
        """Remove an address; removing the default promotes the first remaining one"""
        addresses = UserService.list_addresses(db, user_id)
        address = UserService._find(addresses, address_id)
        addresses = [a for a in addresses if a is not address]
        if address.get("is_default") and addresses:
            addresses[0]["is_default"] = True
        logger.info("address_deleted user_id=%s address_id=%s", user_id, address_id)
        return UserService._save(db, user_id, addresses)

    @staticmethod
    def set_default_address(
        db: Database, user_id: ObjectId, address_id: str
    ) -> List[Dict[str, Any]]:
        addresses = UserService.list_addresses(db, user_id)
        UserService._find(addresses, address_id)
        for address in addresses:
            address["is_default"] = address.get("address_id") == address_id
        return UserService._save(db, user_id, addresses)

    @staticmethod
    def get_address(db: Database, user_id: ObjectId, address_id: str) -> Dict[str, Any]:
        return UserService._find(UserService.list_addresses(db, user_id), address_id)
