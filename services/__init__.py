"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.user_service import UserService
from services.catalog_service import CatalogService
from services.cart_service import CartService
from services.order_service import OrderService
from services.chef_booking_service import ChefBookingService
from services.admin_service import AdminService
from services.image_service import ImageService

# Note: pricing contains plain functions, not a class

__all__ = [
    "AuthService",
    "UserService",
    "CatalogService",
    "CartService",
    "OrderService",
    "ChefBookingService",
    "AdminService",
    "ImageService",
]
