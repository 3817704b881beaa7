"""Customer order routes"""

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database
import logging
from typing import Any, Dict, Optional

from api.dependencies import get_current_user, get_db
from api.responses import paginated_response, success_response
from domain.schemas.order_schemas import (
    CancelOrderRequest,
    PlaceOrderRequest,
    ReviewOrderRequest,
)
from services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])
logger = logging.getLogger("foodfly.api.orders")


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(
    payload: PlaceOrderRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """
    Place an order.

    Without ``items`` the caller's cart is ordered and then emptied. Either
    an inline ``delivery_address`` or a saved ``address_id`` is required.
    """
    order = OrderService.place_order(db, user["user_id"], payload)
    return success_response(order, "Order placed successfully")


@router.get("")
def list_orders(
    status_filter: Optional[str] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    orders, total = OrderService.list_orders(
        db, user["user_id"], status=status_filter, page=page, limit=limit
    )
    return success_response(paginated_response(orders, total, page, limit))


@router.get("/{order_id}")
def get_order(
    order_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    """Order detail; visible to the customer who placed it and to admins"""
    return success_response(OrderService.get_order(db, order_id, user))


@router.patch("/{order_id}/cancel")
def cancel_order(
    order_id: str,
    payload: CancelOrderRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    order = OrderService.cancel_order(db, order_id, user, payload.reason)
    return success_response(order, "Order cancelled")


@router.patch("/{order_id}/review")
def review_order(
    order_id: str,
    payload: ReviewOrderRequest,
    user: Dict[str, Any] = Depends(get_current_user),
    db: Database = Depends(get_db),
):
    order = OrderService.review_order(db, order_id, user, payload.rating, payload.review)
    return success_response(order, "Thanks for your review")
