"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, parse_object_id
from repositories.user_repository import UserRepository
from repositories.booking_repository import BookingRepository
from repositories.order_repository import OrderRepository
from repositories.cart_repository import CartRepository, guest_owner, user_owner
from repositories.catalog_repository import MenuItemRepository, RestaurantRepository

__all__ = [
    "BaseRepository",
    "parse_object_id",
    "UserRepository",
    "BookingRepository",
    "OrderRepository",
    "CartRepository",
    "guest_owner",
    "user_owner",
    "MenuItemRepository",
    "RestaurantRepository",
]
