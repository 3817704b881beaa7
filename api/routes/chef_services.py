"""Personal chef catalogue, bookings and general requests"""

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database
import logging
from typing import Any, Dict, Optional

from api.dependencies import get_current_user, get_db, get_request_meta, require_chef
from api.responses import paginated_response, success_response
from domain.schemas.booking_schemas import (
    AcceptRequestPayload,
    BookChefRequest,
    GeneralRequestCreate,
)
from services.chef_booking_service import ChefBookingService

router = APIRouter(prefix="/chef-services", tags=["Chef Services"])
logger = logging.getLogger("foodfly.api.chef_services")


@router.get("/chefs")
def list_chefs(
    search: Optional[str] = None,
    city: Optional[str] = None,
    cuisine: Optional[str] = None,
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    db: Database = Depends(get_db),
):
    """Active chefs with the city and cuisine facets for the filter bar"""
    result = ChefBookingService.list_chefs(
        db,
        search=search,
        city=city,
        cuisine=cuisine,
        min_price=min_price,
        max_price=max_price,
    )
    return success_response(result)


@router.post("/book", status_code=status.HTTP_201_CREATED)
def book_chef(
    payload: BookChefRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    meta: Dict[str, Any] = Depends(get_request_meta),
    db: Database = Depends(get_db),
):
    """
    Book a specific chef.

    Fails with 409 when the chef already has a pending, confirmed or
    in-progress booking on the same calendar day.
    """
    booking = ChefBookingService.book_chef(db, user["user_id"], payload, meta)
    return success_response(
        {"booking_id": booking["id"], "booking": booking},
        "Chef booking request created successfully",
    )


@router.get("/book")
def list_my_bookings(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Bookings where the caller is either the customer or the chef"""
    bookings, total = ChefBookingService.list_my_bookings(
        db, user["user_id"], status=status_filter, page=page, limit=limit
    )
    return success_response(paginated_response(bookings, total, page, limit))


@router.get("/bookings")
def list_customer_bookings(
    user: Dict[str, Any] = Depends(get_current_user), db: Database = Depends(get_db)
):
    bookings = ChefBookingService.list_customer_bookings(db, user["user_id"])
    return success_response({"bookings": bookings})


@router.post("/general-request", status_code=status.HTTP_201_CREATED)
def create_general_request(
    payload: GeneralRequestCreate,
    user: Dict[str, Any] = Depends(get_current_user),
    meta: Dict[str, Any] = Depends(get_request_meta),
    db: Database = Depends(get_db),
):
    """Open a request that any chef can accept"""
    request = ChefBookingService.create_general_request(
        db, user["user_id"], payload, meta
    )
    return success_response(
        {"request_id": request["id"], "request": request},
        "General chef service request created successfully",
    )


@router.get("/general-request")
def list_general_requests(
    chef: Dict[str, Any] = Depends(require_chef), db: Database = Depends(get_db)
):
    return success_response({"requests": ChefBookingService.list_general_requests(db)})


@router.post("/accept-request")
def accept_request(
    payload: AcceptRequestPayload,
    chef: Dict[str, Any] = Depends(require_chef),
    db: Database = Depends(get_db),
):
    """
    Claim a general request. Only the first chef to accept wins; later
    callers get 409.
    """
    booking = ChefBookingService.accept_request(
        db, chef["user_id"], payload.request_id, payload.final_price
    )
    return success_response({"booking": booking}, "Request accepted successfully")
