"""
Cart Repository - one server-side cart per owner key (``user:<id>`` / ``guest:<token>``)
"""

from typing import Any, Dict, List, Optional
from datetime import datetime

from pymongo.collection import ReturnDocument

from repositories.base import BaseRepository, Document


def user_owner(user_id: str) -> str:
    return f"user:{user_id}"


def guest_owner(token: str) -> str:
    return f"guest:{token}"


class CartRepository(BaseRepository[str]):
    """Repository for cart data access"""

    collection_name = "carts"

    def get_by_owner(self, owner: str) -> Optional[Document]:
        return self.collection.find_one({"owner": owner})

    def save(
        self,
        owner: str,
        items: List[Dict[str, Any]],
        restaurant_id: Optional[str],
        restaurant_name: Optional[str],
    ) -> Document:
        """Upsert the owner's cart contents"""
        return self.collection.find_one_and_update(
            {"owner": owner},
            {
                "$set": {
                    "items": items,
                    "restaurant_id": restaurant_id,
                    "restaurant_name": restaurant_name,
                    "updated_at": datetime.utcnow(),
                },
                "$setOnInsert": {"owner": owner},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )

    def delete_by_owner(self, owner: str) -> bool:
        return self.collection.delete_one({"owner": owner}).deleted_count == 1
