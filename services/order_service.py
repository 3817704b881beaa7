from typing import Any, Dict, List, Optional
from datetime import datetime, timedelta
import logging
import random

from pymongo.database import Database

from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import (
    CANCELLABLE_ORDER_STATUSES,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    UserRole,
)
from domain.mappers import OrderMapper
from domain.schemas.order_schemas import PlaceOrderRequest
from repositories import (
    CartRepository,
    MenuItemRepository,
    OrderRepository,
    RestaurantRepository,
    parse_object_id,
    user_owner,
)
from services.user_service import UserService

logger = logging.getLogger("foodfly.orders")

TAX_RATE = 0.05
DELIVERY_ETA_MINUTES = 45


def generate_order_number(now: Optional[datetime] = None) -> str:
    """``FF`` + yyMMddHHmmss + four random digits"""
    now = now or datetime.utcnow()
    return f"FF{now.strftime('%y%m%d%H%M%S')}{random.randint(0, 9999):04d}"


def compute_totals(subtotal: float, delivery_fee: float) -> Dict[str, float]:
    taxes = round(subtotal * TAX_RATE, 2)
    return {
        "subtotal": round(subtotal, 2),
        "delivery_fee": delivery_fee,
        "taxes": taxes,
        "total_amount": round(subtotal + delivery_fee + taxes, 2),
    }


class OrderService:
    @staticmethod
    def _resolve_items(db: Database, requested: List[Dict[str, Any]]):
        """Price requested lines from the catalogue; all lines must share a restaurant."""
        menu = {
            m["_id"]: m
            for m in MenuItemRepository(db).get_many([r["menu_item_id"] for r in requested])
        }
        missing = [r["menu_item_id"] for r in requested if r["menu_item_id"] not in menu]
        if missing:
            raise ServiceValidationError(
                "Some menu items do not exist", details={"menu_item_ids": missing}
            )
        restaurant_ids = {menu[r["menu_item_id"]]["restaurant_id"] for r in requested}
        if len(restaurant_ids) != 1:
            raise ServiceValidationError("All items must come from the same restaurant")

        lines = []
        for r in requested:
            item = menu[r["menu_item_id"]]
            lines.append(
                {
                    "menu_item_id": item["_id"],
                    "name": item["name"],
                    "description": item.get("description"),
                    "price": item["price"],
                    "quantity": r["quantity"],
                    "customizations": r.get("customizations") or [],
                    "image": item.get("image"),
                }
            )
        return restaurant_ids.pop(), lines

    @staticmethod
    def place_order(
        db: Database, customer_id: str, payload: PlaceOrderRequest
    ) -> Dict[str, Any]:
        """
        Create an order from explicit items or from the customer's cart.

        Prices always come from the catalogue, never from the client. An
        order placed from the cart empties it.

        Raises:
            ServiceValidationError: empty order, unknown items, mixed restaurants, no address
            NotFoundError: unknown saved address
        """
        from_cart = payload.items is None
        cart_repo = CartRepository(db)
        owner = user_owner(customer_id)
        if from_cart:
            cart = cart_repo.get_by_owner(owner) or {}
            requested = cart.get("items") or []
        else:
            requested = [i.model_dump() for i in payload.items]
        if not requested:
            raise ServiceValidationError("Order must contain at least one item")

        if payload.delivery_address is not None:
            address = payload.delivery_address.model_dump()
        elif payload.address_id:
            saved = UserService.get_address(
                db, parse_object_id(customer_id, "user"), payload.address_id
            )
            address = {
                k: saved.get(k) for k in ("street", "city", "state", "zip_code", "landmark")
            }
        else:
            raise ServiceValidationError("Delivery address is required")

        restaurant_id, lines = OrderService._resolve_items(db, requested)
        restaurant = RestaurantRepository(db).get_by_id(restaurant_id) or {}
        subtotal = sum(line["price"] * line["quantity"] for line in lines)
        totals = compute_totals(subtotal, restaurant.get("delivery_fee", 0))

        now = datetime.utcnow()
        order = OrderRepository(db).create_order(
            {
                "order_number": generate_order_number(now),
                "customer_id": customer_id,
                "restaurant_id": restaurant_id,
                "restaurant_name": restaurant.get("name"),
                "items": lines,
                **totals,
                "status": OrderStatus.PLACED.value,
                "payment_method": payload.payment_method.value,
                "payment_status": PaymentStatus.PENDING.value,
                "delivery_address": address,
                "special_instructions": payload.special_instructions,
                "estimated_delivery_time": now + timedelta(minutes=DELIVERY_ETA_MINUTES),
                "placed_at": now,
                "created_at": now,
                "updated_at": now,
            }
        )
        if from_cart:
            cart_repo.delete_by_owner(owner)
        logger.info(
            "order_placed order_id=%s order_number=%s customer_id=%s total=%s",
            order["_id"],
            order["order_number"],
            customer_id,
            order["total_amount"],
        )
        return OrderMapper.to_response(order, restaurant)

    @staticmethod
    def list_orders(
        db: Database,
        customer_id: str,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ):
        repo = OrderRepository(db)
        orders = repo.list_for_customer(
            customer_id, status=status, skip=(page - 1) * limit, limit=limit
        )
        return [OrderMapper.to_summary(o) for o in orders], repo.count_for_customer(
            customer_id, status=status
        )

    @staticmethod
    def _load_owned(db: Database, order_id: str, user: Dict[str, Any]) -> Dict[str, Any]:
        order = OrderRepository(db).get_by_id(parse_object_id(order_id, "order"))
        if not order:
            raise NotFoundError("Order not found")
        if (
            order.get("customer_id") != user["user_id"]
            and user.get("role") != UserRole.ADMIN.value
        ):
            raise ForbiddenError("Access denied")
        return order

    @staticmethod
    def get_order(db: Database, order_id: str, user: Dict[str, Any]) -> Dict[str, Any]:
        """Order detail for its owner or an admin"""
        order = OrderService._load_owned(db, order_id, user)
        restaurant = RestaurantRepository(db).get_by_id(order.get("restaurant_id"))
        return OrderMapper.to_response(order, restaurant)

    @staticmethod
    def cancel_order(
        db: Database, order_id: str, user: Dict[str, Any], reason: Optional[str] = None
    ) -> Dict[str, Any]:
        order = OrderService._load_owned(db, order_id, user)
        if order["status"] not in CANCELLABLE_ORDER_STATUSES:
            raise ConflictError(
                f"Order cannot be cancelled once it is {order['status']}"
            )
        now = datetime.utcnow()
        changes = {
            "status": OrderStatus.CANCELLED.value,
            "cancelled_at": now,
            "cancellation_reason": reason,
        }
        if order.get("payment_method") == PaymentMethod.ONLINE.value and order.get(
            "payment_status"
        ) == PaymentStatus.PAID.value:
            changes["payment_status"] = PaymentStatus.REFUNDED.value
        updated = OrderRepository(db).update(order["_id"], changes)
        logger.info("order_cancelled order_id=%s by=%s", order["_id"], user["user_id"])
        return OrderMapper.to_response(updated)

    @staticmethod
    def review_order(
        db: Database,
        order_id: str,
        user: Dict[str, Any],
        rating: int,
        review: Optional[str] = None,
    ) -> Dict[str, Any]:
        order = OrderService._load_owned(db, order_id, user)
        if order["status"] != OrderStatus.DELIVERED.value:
            raise ConflictError("Only delivered orders can be reviewed")
        if not 1 <= rating <= 5:
            raise ServiceValidationError("Rating must be between 1 and 5")
        updated = OrderRepository(db).update(
            order["_id"], {"rating": rating, "review": review}
        )
        logger.info("order_reviewed order_id=%s rating=%s", order["_id"], rating)
        return OrderMapper.to_response(updated)
