"""Restaurant and menu routes (public)"""

from fastapi import APIRouter, Depends, Query
from pymongo.database import Database
import logging
from typing import Optional

from api.dependencies import get_db
from api.responses import success_response
from services.catalog_service import CatalogService

router = APIRouter(tags=["Catalog"])
logger = logging.getLogger("foodfly.api.catalog")


@router.get("/restaurants")
def list_restaurants(db: Database = Depends(get_db)):
    """All restaurants, each with its menu"""
    restaurants = CatalogService.list_restaurants(db)
    return success_response(
        {"restaurants": restaurants}, "Restaurants retrieved successfully"
    )


@router.get("/restaurants/{restaurant_id}")
def get_restaurant(restaurant_id: str, db: Database = Depends(get_db)):
    restaurant = CatalogService.get_restaurant(db, restaurant_id)
    return success_response(
        {"restaurant": restaurant}, "Restaurant retrieved successfully"
    )


@router.get("/menu")
def list_menu(
    category: Optional[str] = Query(
        None, description="Category slug, e.g. north-indian (case-insensitive)"
    ),
    db: Database = Depends(get_db),
):
    """
    Menu items for one category, or every item when no category is given.

    Unknown categories return an empty list.
    """
    items = CatalogService.list_menu(db, category)
    message = (
        f"Menu items for {category} retrieved successfully"
        if category
        else "All menu items retrieved successfully"
    )
    return success_response({"menu_items": items, "category": category}, message)
