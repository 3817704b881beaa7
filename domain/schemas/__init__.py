"""
Domain schemas package - Pydantic models for request validation.
"""

from domain.schemas.auth_schemas import (
    RegisterRequest,
    LoginRequest,
    GoogleLoginRequest,
    AdminLoginRequest,
)
from domain.schemas.user_schemas import (
    ProfileUpdateRequest,
    AddressCreate,
    AddressUpdate,
)
from domain.schemas.cart_schemas import CartItemAdd, CartItemQuantityUpdate
from domain.schemas.order_schemas import (
    OrderItemRequest,
    DeliveryAddress,
    PlaceOrderRequest,
    CancelOrderRequest,
    ReviewOrderRequest,
)
from domain.schemas.booking_schemas import (
    VenueAddress,
    Venue,
    Budget,
    BookChefRequest,
    GeneralRequestCreate,
    AcceptRequestPayload,
)
from domain.schemas.admin_schemas import (
    ChefUpdateRequest,
    DeliveryPartnerUpdateRequest,
    AdminOrderUpdateRequest,
    ChefBookingUpdateRequest,
    MenuImageItem,
    ProcessImagesRequest,
)

__all__ = [
    # Auth schemas
    "RegisterRequest",
    "LoginRequest",
    "GoogleLoginRequest",
    "AdminLoginRequest",
    # User schemas
    "ProfileUpdateRequest",
    "AddressCreate",
    "AddressUpdate",
    # Cart schemas
    "CartItemAdd",
    "CartItemQuantityUpdate",
    # Order schemas
    "OrderItemRequest",
    "DeliveryAddress",
    "PlaceOrderRequest",
    "CancelOrderRequest",
    "ReviewOrderRequest",
    # Chef booking schemas
    "VenueAddress",
    "Venue",
    "Budget",
    "BookChefRequest",
    "GeneralRequestCreate",
    "AcceptRequestPayload",
    # Admin schemas
    "ChefUpdateRequest",
    "DeliveryPartnerUpdateRequest",
    "AdminOrderUpdateRequest",
    "ChefBookingUpdateRequest",
    "MenuImageItem",
    "ProcessImagesRequest",
]
