from typing import Any, Dict, List, Optional
import logging

from pymongo.database import Database

from app.exceptions import NotFoundError
from data.catalog import MENU_ITEMS, RESTAURANTS
from domain.mappers import serialize_document
from repositories import MenuItemRepository, RestaurantRepository

logger = logging.getLogger("foodfly.catalog")


class CatalogService:
    @staticmethod
    def seed(db: Database, force: bool = False) -> Dict[str, int]:
        """
        Load ``data/catalog.py`` into Mongo.

        Only runs when the restaurants collection is empty unless ``force`` is
        set, in which case both collections are replaced.

        Returns:
            counts of inserted restaurants and menu items
        """
        restaurant_repo = RestaurantRepository(db)
        menu_repo = MenuItemRepository(db)
        if not force and restaurant_repo.count({}) > 0:
            logger.debug("catalog_seed_skipped reason=not_empty")
            return {"restaurants": 0, "menu_items": 0}
        if force:
            restaurant_repo.collection.delete_many({})
            menu_repo.collection.delete_many({})
        counts = {
            "restaurants": restaurant_repo.insert_many([dict(r) for r in RESTAURANTS]),
            "menu_items": menu_repo.insert_many([dict(m) for m in MENU_ITEMS]),
        }
        logger.info(
            "catalog_seeded restaurants=%s menu_items=%s",
            counts["restaurants"],
            counts["menu_items"],
        )
        return counts

    @staticmethod
    def _with_menu(db: Database, restaurant: Dict[str, Any]) -> Dict[str, Any]:
        menu = MenuItemRepository(db).list_by_restaurant(restaurant["_id"])
        out = serialize_document(restaurant)
        out["menu"] = [serialize_document(m) for m in menu]
        return out

    @staticmethod
    def list_restaurants(db: Database) -> List[Dict[str, Any]]:
        restaurants = RestaurantRepository(db).list_all()
        return [CatalogService._with_menu(db, r) for r in restaurants]

    @staticmethod
    def get_restaurant(db: Database, restaurant_id: str) -> Dict[str, Any]:
        restaurant = RestaurantRepository(db).get_by_id(restaurant_id)
        if not restaurant:
            raise NotFoundError("Restaurant not found")
        return CatalogService._with_menu(db, restaurant)

    @staticmethod
    def list_menu(db: Database, category: Optional[str] = None) -> List[Dict[str, Any]]:
        """Menu items of one category slug (case-insensitive), or every item.

        An unknown category yields an empty list rather than an error.
        """
        repo = MenuItemRepository(db)
        items = repo.list_by_category(category.strip()) if category else repo.list_all()
        restaurants = {r["_id"]: r for r in RestaurantRepository(db).list_all()}
        out = []
        for item in items:
            doc = serialize_document(item)
            doc["restaurant"] = (restaurants.get(item.get("restaurant_id")) or {}).get(
                "name"
            )
            out.append(doc)
        return out
