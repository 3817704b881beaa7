"""Admin back-office routes: session, chefs, delivery partners, orders, chef bookings"""

from fastapi import APIRouter, Depends, Query, Response
from pymongo.database import Database
import logging
from typing import Any, Dict, Optional

from api.dependencies import ADMIN_TOKEN_COOKIE, get_db, require_admin
from api.responses import success_response
from app.config import settings
from domain.schemas.admin_schemas import (
    AdminOrderUpdateRequest,
    ChefBookingUpdateRequest,
    ChefUpdateRequest,
    DeliveryPartnerUpdateRequest,
)
from domain.schemas.auth_schemas import AdminLoginRequest
from services.admin_service import AdminService
from services.auth_service import AuthService

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = logging.getLogger("foodfly.api.admin")


# ------------------ Session ------------------
@router.post("/login")
def admin_login(
    payload: AdminLoginRequest, response: Response, db: Database = Depends(get_db)
):
    """Admin sign-in; also sets the ``admin-token`` cookie"""
    session = AuthService.admin_login(db, payload.email, payload.password)
    response.set_cookie(
        ADMIN_TOKEN_COOKIE,
        session["token"],
        max_age=settings.jwt_lifetime_hours * 3600,
        httponly=True,
        secure=settings.is_production(),
        samesite="lax",
        path="/",
    )
    return success_response(session, "Admin login successful")


@router.post("/logout")
def admin_logout(response: Response):
    response.set_cookie(
        ADMIN_TOKEN_COOKIE,
        "",
        max_age=0,
        httponly=True,
        secure=settings.is_production(),
        samesite="lax",
        path="/",
    )
    return success_response(None, "Logged out successfully")


# ------------------ Chefs ------------------
@router.get("/chefs")
def list_chefs(
    status_filter: Optional[str] = Query(None, alias="status"),
    specialization: Optional[str] = None,
    verified: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    result = AdminService.list_chefs(
        db,
        status=status_filter,
        specialization=specialization,
        verified=verified,
        page=page,
        limit=limit,
    )
    return success_response(result, "Chefs retrieved successfully")


@router.put("/chefs")
def update_chef(
    payload: ChefUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    """Actions: verify, activate, deactivate, update"""
    chef = AdminService.update_chef(db, payload.chef_id, payload.action, payload.update_data)
    return success_response({"chef": chef}, f"Chef {payload.action} successful")


@router.delete("/chefs")
def delete_chef(
    chef_id: str = Query(...),
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    """Refused while the chef has pending, confirmed or in-progress bookings"""
    AdminService.delete_chef(db, chef_id)
    return success_response({"chef_id": chef_id}, "Chef deleted successfully")


# ------------------ Delivery partners ------------------
@router.get("/delivery-partners")
def list_delivery_partners(
    status_filter: Optional[str] = Query(None, alias="status"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    result = AdminService.list_delivery_partners(
        db, status=status_filter, search=search, page=page, limit=limit
    )
    return success_response(result, "Delivery partners retrieved successfully")


@router.put("/delivery-partners")
def update_delivery_partner(
    payload: DeliveryPartnerUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    """Actions: verify, activate, deactivate"""
    partner = AdminService.update_delivery_partner(db, payload.partner_id, payload.action)
    return success_response({"partner": partner}, f"Partner {payload.action} successful")


# ------------------ Orders ------------------
@router.get("/orders")
def list_orders(
    admin: Dict[str, Any] = Depends(require_admin), db: Database = Depends(get_db)
):
    return success_response(
        {"orders": AdminService.list_orders(db)}, "Orders retrieved successfully"
    )


@router.put("/orders")
def update_order_status(
    payload: AdminOrderUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    order = AdminService.update_order_status(
        db, payload.order_id, payload.status, payload.notes
    )
    return success_response({"order": order}, "Order status updated successfully")


# ------------------ Chef bookings ------------------
@router.get("/chef-bookings")
def list_chef_bookings(
    status_filter: Optional[str] = Query(None, alias="status"),
    chef_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    result = AdminService.list_chef_bookings(
        db,
        status=status_filter,
        chef_id=chef_id,
        customer_id=customer_id,
        page=page,
        limit=limit,
    )
    return success_response(result, "Chef bookings retrieved successfully")


@router.put("/chef-bookings")
def update_chef_booking(
    payload: ChefBookingUpdateRequest,
    admin: Dict[str, Any] = Depends(require_admin),
    db: Database = Depends(get_db),
):
    """Actions: cancel, complete, update"""
    booking = AdminService.update_chef_booking(
        db, payload.booking_id, payload.action, payload.update_data
    )
    return success_response({"booking": booking}, f"Booking {payload.action} successful")
