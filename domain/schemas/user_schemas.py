from pydantic import BaseModel, Field
from typing import Optional


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the caller's own profile"""

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=20)


class AddressCreate(BaseModel):
    """Schema for a new delivery address"""

    label: str = Field(default="Home", max_length=40, description="e.g. Home, Work")
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=3, max_length=12)
    landmark: Optional[str] = None
    is_default: bool = False


class AddressUpdate(BaseModel):
    label: Optional[str] = Field(None, max_length=40)
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = Field(None, min_length=3, max_length=12)
    landmark: Optional[str] = None
    is_default: Optional[bool] = None
