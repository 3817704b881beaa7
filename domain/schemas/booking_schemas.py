"""
Chef booking request schemas.

Required-field checks live in the service so that a missing field yields a
400 with per-field details rather than a 422; the fields here are therefore
mostly optional and only type-checked.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import datetime, timezone


class VenueAddress(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None


class Venue(BaseModel):
    type: str = Field(default="customer_home", description="customer_home | event_venue | other")
    address: Optional[VenueAddress] = None


class Budget(BaseModel):
    min: float = Field(default=0, ge=0)
    max: float = Field(..., gt=0)
    is_flexible: bool = False


class _EventFields(BaseModel):
    event_type: Optional[str] = None
    event_date: Optional[datetime] = None
    event_time: Optional[str] = None
    duration: Optional[float] = Field(None, ge=0, le=24, description="Hours")
    guest_count: Optional[int] = Field(None, ge=0, le=500)
    special_requests: Optional[str] = None
    dietary_restrictions: List[str] = Field(default_factory=list)
    venue: Optional[Venue] = None
    payment_method: str = "cod"

    @field_validator("event_date", mode="before")
    @classmethod
    def accept_plain_dates(cls, v):
        # "2026-12-24" is accepted as midnight of that day
        if isinstance(v, str) and len(v) == 10:
            return f"{v}T00:00:00"
        return v

    @field_validator("event_date")
    @classmethod
    def to_naive_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class BookChefRequest(_EventFields):
    """Direct booking of a specific chef"""

    chef_id: Optional[str] = None
    cuisine: Optional[Union[List[str], str]] = None


class GeneralRequestCreate(_EventFields):
    """Open request visible to all chefs until one accepts it"""

    cuisine: Optional[Union[List[str], str]] = None
    budget: Optional[Budget] = None


class AcceptRequestPayload(BaseModel):
    request_id: str = Field(..., min_length=1)
    final_price: Optional[float] = Field(None, ge=0)
