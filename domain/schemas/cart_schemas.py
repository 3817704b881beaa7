from pydantic import BaseModel, Field
from typing import List


class CartItemAdd(BaseModel):
    """Schema for adding a menu item to the cart"""

    menu_item_id: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1, le=50)
    customizations: List[str] = Field(default_factory=list)


class CartItemQuantityUpdate(BaseModel):
    quantity: int = Field(..., ge=0, le=50, description="0 removes the item")
