"""
User Repository - Data access layer for customers, chefs, delivery partners and admins
"""

from typing import Any, Dict, List, Mapping, Optional
from datetime import datetime

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import ReturnDocument
from pymongo.errors import DuplicateKeyError

from repositories.base import BaseRepository, Document
from domain.enums import UserRole
from app.exceptions import ConflictError


class UserRepository(BaseRepository[ObjectId]):
    """Repository for user data access"""

    collection_name = "users"

    def get_by_email(self, email: str) -> Optional[Document]:
        """Get user by email (stored lower-case)"""
        return self.collection.find_one({"email": email.lower()})

    def get_by_google_id(self, google_id: str) -> Optional[Document]:
        return self.collection.find_one({"google_id": google_id})

    def create_user(self, document: Document) -> Document:
        """Insert a user; a taken email raises ConflictError"""
        now = datetime.utcnow()
        document.setdefault("created_at", now)
        document.setdefault("updated_at", now)
        document.setdefault("addresses", [])
        try:
            return self.create(document)
        except DuplicateKeyError:
            raise ConflictError(
                f"User with email {document.get('email')} already exists"
            )

    def get_with_role(self, user_id: ObjectId, role: UserRole) -> Optional[Document]:
        return self.collection.find_one({"_id": user_id, "role": role.value})

    def list_by_role(
        self,
        role: UserRole,
        extra: Optional[Mapping[str, Any]] = None,
        skip: int = 0,
        limit: int = 0,
        projection: Optional[Mapping[str, Any]] = None,
    ) -> List[Document]:
        """Users of one role, newest first"""
        query: Dict[str, Any] = {"role": role.value}
        if extra:
            query.update(extra)
        return self.find(
            query,
            sort=[("created_at", DESCENDING)],
            skip=skip,
            limit=limit,
            projection=projection,
        )

    def count_by_role(
        self, role: UserRole, extra: Optional[Mapping[str, Any]] = None
    ) -> int:
        query: Dict[str, Any] = {"role": role.value}
        if extra:
            query.update(extra)
        return self.count(query)

    def increment_chef_events(self, chef_id: ObjectId, by: int = 1) -> None:
        self.collection.update_one(
            {"_id": chef_id}, {"$inc": {"chef_profile.total_events": by}}
        )

    def set_addresses(
        self, user_id: ObjectId, addresses: List[Document]
    ) -> Optional[Document]:
        """Replace the user's address book"""
        return self.collection.find_one_and_update(
            {"_id": user_id},
            {"$set": {"addresses": addresses, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
