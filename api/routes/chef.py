"""Chef dashboard routes"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
import logging
from typing import Any, Dict

from api.dependencies import get_db, require_chef
from api.responses import success_response
from services.chef_booking_service import ChefBookingService

router = APIRouter(prefix="/chef", tags=["Chef"])
logger = logging.getLogger("foodfly.api.chef")


@router.get("/notifications")
def chef_notifications(
    chef: Dict[str, Any] = Depends(require_chef), db: Database = Depends(get_db)
):
    """Open general requests plus the chef's own pending/confirmed bookings"""
    notifications = ChefBookingService.chef_notifications(db, chef["user_id"])
    return success_response({"notifications": notifications})
