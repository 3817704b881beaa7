from pydantic import BaseModel, Field
from typing import Optional, List

from domain.enums import PaymentMethod


class OrderItemRequest(BaseModel):
    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=50)
    customizations: List[str] = Field(default_factory=list)


class DeliveryAddress(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=3, max_length=12)
    landmark: Optional[str] = None


class PlaceOrderRequest(BaseModel):
    """Schema for checkout.

    Either ``items`` is given, or the order is built from the caller's cart.
    The delivery address is either inline or one of the saved addresses.
    """

    items: Optional[List[OrderItemRequest]] = None
    delivery_address: Optional[DeliveryAddress] = None
    address_id: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.COD
    special_instructions: Optional[str] = Field(None, max_length=500)


class CancelOrderRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=300)


class ReviewOrderRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = Field(None, max_length=1000)
