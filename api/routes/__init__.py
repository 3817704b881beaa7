"""API routes package"""

from . import (
    admin,
    admin_images,
    auth,
    cart,
    catalog,
    chef,
    chef_services,
    health,
    orders,
    users,
)

__all__ = [
    "admin",
    "admin_images",
    "auth",
    "cart",
    "catalog",
    "chef",
    "chef_services",
    "health",
    "orders",
    "users",
]
