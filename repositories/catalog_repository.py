"""
Catalog Repository - Data access layer for restaurants and menu items
"""

import re
from typing import List

from pymongo import ASCENDING

from repositories.base import BaseRepository, Document


class RestaurantRepository(BaseRepository[str]):
    """Restaurants keyed by short string ids ("1", "2", ...)"""

    collection_name = "restaurants"

    def list_all(self) -> List[Document]:
        return self.find({}, sort=[("_id", ASCENDING)])

    def insert_many(self, documents: List[Document]) -> int:
        if not documents:
            return 0
        return len(self.collection.insert_many(documents).inserted_ids)


class MenuItemRepository(BaseRepository[str]):
    """Menu items keyed by slug"""

    collection_name = "menu_items"

    def list_by_restaurant(self, restaurant_id: str) -> List[Document]:
        return self.find({"restaurant_id": restaurant_id}, sort=[("category", ASCENDING)])

    def list_by_category(self, category_key: str) -> List[Document]:
        """Items whose category slug matches, ignoring case"""
        pattern = re.compile(f"^{re.escape(category_key)}$", re.IGNORECASE)
        return self.find({"category_key": pattern})

    def list_all(self) -> List[Document]:
        return self.find({}, sort=[("restaurant_id", ASCENDING)])

    def get_many(self, item_ids: List[str]) -> List[Document]:
        return self.find({"_id": {"$in": list(item_ids)}})

    def insert_many(self, documents: List[Document]) -> int:
        if not documents:
            return 0
        return len(self.collection.insert_many(documents).inserted_ids)
