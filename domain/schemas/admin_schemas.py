from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any


class ChefUpdateRequest(BaseModel):
    """Admin action on a chef: verify | activate | deactivate | update"""

    chef_id: str
    action: str
    update_data: Optional[Dict[str, Any]] = None


class DeliveryPartnerUpdateRequest(BaseModel):
    """Admin action on a delivery partner: verify | activate | deactivate"""

    partner_id: str
    action: str


class AdminOrderUpdateRequest(BaseModel):
    order_id: str
    status: str
    notes: Optional[str] = Field(None, max_length=1000)


class ChefBookingUpdateRequest(BaseModel):
    """Admin action on a chef booking: cancel | complete | update"""

    booking_id: str
    action: str
    update_data: Optional[Dict[str, Any]] = None


class MenuImageItem(BaseModel):
    id: str
    name: str
    category: str


class ProcessImagesRequest(BaseModel):
    menu_items: List[MenuImageItem] = Field(..., min_length=1)
    mode: str = Field(default="single", description="single | batch")
