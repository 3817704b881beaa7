from typing import Any, Dict, List, Optional
from datetime import datetime
import logging
import re

from pymongo import DESCENDING
from pymongo.database import Database

from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import (
    BookingStatus,
    ChefAvailability,
    OrderStatus,
    PartnerAvailability,
    UserRole,
)
from domain.mappers import OrderMapper, UserMapper, serialize_document, serialize_value
from repositories import (
    BookingRepository,
    OrderRepository,
    UserRepository,
    parse_object_id,
)

logger = logging.getLogger("foodfly.admin")

CHEF_UPDATABLE_FIELDS = ("name", "phone")
BOOKING_UPDATABLE_PREFIXES = ("booking_details.", "payment.", "pricing.")
BOOKING_UPDATABLE_FIELDS = ("status", "admin_notes")


def _pagination(page: int, limit: int, total: int, count: int) -> Dict[str, Any]:
    skip = (page - 1) * limit
    return {
        "current_page": page,
        "total_pages": (total + limit - 1) // limit,
        "total_count": total,
        "has_more": skip + count < total,
    }


def _flatten(prefix: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """{"a": {"b": 1}} -> {"prefix.a.b": 1} so partial updates do not clobber siblings"""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict) and value:
            flat.update(_flatten(path, value))
        else:
            flat[path] = value
    return flat


class AdminService:
    # ------------------ Chefs ------------------
    @staticmethod
    def list_chefs(
        db: Database,
        status: Optional[str] = None,
        specialization: Optional[str] = None,
        verified: Optional[bool] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """
        Chef roster with booking performance and a fleet summary.

        Each chef carries total and completed bookings, completed revenue,
        efficiency (completed / total, %), average earnings per completed
        event, ``is_online`` (available or busy) and an average rating that
        prefers booking ratings over the profile rating.
        """
        query: Dict[str, Any] = {}
        if status:
            query["chef_profile.availability.status"] = status
        if specialization:
            query["chef_profile.specialization"] = re.compile(
                re.escape(specialization), re.IGNORECASE
            )
        if verified is not None:
            query["chef_profile.verification.is_verified"] = verified

        user_repo = UserRepository(db)
        booking_repo = BookingRepository(db)
        total = user_repo.count_by_role(UserRole.CHEF, query)
        chefs = user_repo.find(
            {"role": UserRole.CHEF.value, **query},
            sort=[("chef_profile.joined_at", DESCENDING)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        stats = booking_repo.stats_by_chef([str(c["_id"]) for c in chefs])

        rows = []
        for chef in chefs:
            profile = chef.get("chef_profile") or {}
            s = stats[str(chef["_id"])]
            availability = (profile.get("availability") or {}).get("status")
            rating = s["avg_rating"] or profile.get("rating") or 5
            row = UserMapper.to_response(chef)
            row["stats"] = {
                "total_bookings": s["total_bookings"],
                "completed_events": s["completed_bookings"],
                "total_revenue": s["total_revenue"],
                "efficiency": (
                    round(s["completed_bookings"] / s["total_bookings"] * 100)
                    if s["total_bookings"]
                    else 0
                ),
                "avg_earnings": (
                    round(s["total_revenue"] / s["completed_bookings"])
                    if s["completed_bookings"]
                    else 0
                ),
                "is_online": availability
                in (ChefAvailability.AVAILABLE.value, ChefAvailability.BUSY.value),
                "avg_rating": round(rating, 1),
            }
            rows.append(row)

        return {
            "chefs": rows,
            "pagination": _pagination(page, limit, total, len(rows)),
            "summary": AdminService._chef_summary(db),
        }

    @staticmethod
    def _chef_summary(db: Database) -> Dict[str, Any]:
        chefs = UserRepository(db).list_by_role(
            UserRole.CHEF, projection={"chef_profile": 1}
        )
        profiles = [c.get("chef_profile") or {} for c in chefs]
        ratings = [p["rating"] for p in profiles if isinstance(p.get("rating"), (int, float))]

        def availability(p):
            return (p.get("availability") or {}).get("status")

        return {
            "total_chefs": len(profiles),
            "verified_chefs": sum(
                1 for p in profiles if (p.get("verification") or {}).get("is_verified")
            ),
            "available_chefs": sum(
                1 for p in profiles if availability(p) == ChefAvailability.AVAILABLE.value
            ),
            "busy_chefs": sum(
                1 for p in profiles if availability(p) == ChefAvailability.BUSY.value
            ),
            "avg_rating": round(sum(ratings) / len(ratings), 1) if ratings else 5,
            "total_chef_bookings": BookingRepository(db).count({}),
        }

    @staticmethod
    def update_chef(
        db: Database,
        chef_id: str,
        action: str,
        update_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Apply an admin action to a chef.

        ``update`` accepts ``name``, ``phone`` and anything under
        ``chef_profile``; other keys are rejected.

        Raises:
            ServiceValidationError: unknown action or disallowed update field
            NotFoundError: chef not found
        """
        user_repo = UserRepository(db)
        oid = parse_object_id(chef_id, "chef")
        if not user_repo.get_with_role(oid, UserRole.CHEF):
            raise NotFoundError("Chef not found")

        if action == "verify":
            changes = {
                "chef_profile.verification.is_verified": True,
                "chef_profile.verification.verified_at": datetime.utcnow(),
            }
        elif action == "activate":
            changes = {"chef_profile.is_active": True}
        elif action == "deactivate":
            changes = {"chef_profile.is_active": False}
        elif action == "update":
            update_data = dict(update_data or {})
            profile = update_data.pop("chef_profile", None)
            rejected = [k for k in update_data if k not in CHEF_UPDATABLE_FIELDS]
            if rejected:
                raise ServiceValidationError(
                    "These fields cannot be updated", details={"fields": rejected}
                )
            changes = dict(update_data)
            if isinstance(profile, dict):
                changes.update(_flatten("chef_profile", profile))
            if not changes:
                raise ServiceValidationError("Nothing to update")
        else:
            raise ServiceValidationError("Invalid action")

        chef = user_repo.update(oid, changes)
        logger.info("admin_chef_updated chef_id=%s action=%s", chef_id, action)
        return UserMapper.to_response(chef)

    @staticmethod
    def delete_chef(db: Database, chef_id: str) -> None:
        user_repo = UserRepository(db)
        oid = parse_object_id(chef_id, "chef")
        if not user_repo.get_with_role(oid, UserRole.CHEF):
            raise NotFoundError("Chef not found")
        if BookingRepository(db).has_active_for_chef(str(oid)):
            raise ServiceValidationError("Cannot delete chef with active bookings")
        user_repo.delete(oid)
        logger.info("admin_chef_deleted chef_id=%s", chef_id)

    # ------------------ Delivery partners ------------------
    @staticmethod
    def list_delivery_partners(
        db: Database,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if status:
            query["delivery_profile.availability.status"] = status
        if search:
            pattern = re.compile(re.escape(search), re.IGNORECASE)
            query["$or"] = [{"name": pattern}, {"email": pattern}, {"phone": pattern}]

        user_repo = UserRepository(db)
        total = user_repo.count_by_role(UserRole.DELIVERY, query)
        partners = user_repo.list_by_role(
            UserRole.DELIVERY, query, skip=(page - 1) * limit, limit=limit
        )

        everyone = [
            p.get("delivery_profile") or {}
            for p in user_repo.list_by_role(
                UserRole.DELIVERY, projection={"delivery_profile": 1}
            )
        ]

        def availability(p):
            return (p.get("availability") or {}).get("status")

        summary = {
            "total_partners": len(everyone),
            "online_partners": sum(
                1 for p in everyone if availability(p) == PartnerAvailability.ONLINE.value
            ),
            "busy_partners": sum(
                1 for p in everyone if availability(p) == PartnerAvailability.BUSY.value
            ),
            "verified_partners": sum(1 for p in everyone if p.get("is_verified")),
            "total_deliveries": sum(
                (p.get("performance") or {}).get("completed_deliveries", 0) or 0
                for p in everyone
            ),
        }
        return {
            "partners": [UserMapper.to_response(p) for p in partners],
            "pagination": _pagination(page, limit, total, len(partners)),
            "summary": summary,
        }

    @staticmethod
    def update_delivery_partner(db: Database, partner_id: str, action: str) -> Dict[str, Any]:
        user_repo = UserRepository(db)
        oid = parse_object_id(partner_id, "partner")
        if not user_repo.get_with_role(oid, UserRole.DELIVERY):
            raise NotFoundError("Delivery partner not found")
        if action == "verify":
            changes = {
                "delivery_profile.is_verified": True,
                "delivery_profile.verified_at": datetime.utcnow(),
            }
        elif action == "activate":
            changes = {"delivery_profile.is_active": True}
        elif action == "deactivate":
            changes = {
                "delivery_profile.is_active": False,
                "delivery_profile.availability.status": PartnerAvailability.OFFLINE.value,
                "delivery_profile.availability.last_status_update": datetime.utcnow(),
            }
        else:
            raise ServiceValidationError("Invalid action")
        partner = user_repo.update(oid, changes)
        logger.info("admin_partner_updated partner_id=%s action=%s", partner_id, action)
        return UserMapper.to_response(partner)

    # ------------------ Orders ------------------
    @staticmethod
    def list_orders(db: Database) -> List[Dict[str, Any]]:
        """All orders newest first with the customer's contact details"""
        orders = OrderRepository(db).list_all()
        customers = AdminService._contacts(db, {o.get("customer_id") for o in orders})
        rows = []
        for order in orders:
            contact = customers.get(order.get("customer_id")) or {}
            row = OrderMapper.to_response(order)
            row.update(
                {
                    "customer_name": contact.get("name") or "",
                    "customer_email": contact.get("email") or "",
                    "customer_phone": contact.get("phone") or "",
                    "created_at": serialize_value(order.get("created_at")),
                    "admin_notes": order.get("admin_notes"),
                }
            )
            rows.append(row)
        return rows

    @staticmethod
    def update_order_status(
        db: Database, order_id: str, status: str, notes: Optional[str] = None
    ) -> Dict[str, Any]:
        if status not in {s.value for s in OrderStatus}:
            raise ServiceValidationError(
                f"Invalid order status: {status}",
                details={"allowed": [s.value for s in OrderStatus]},
            )
        changes: Dict[str, Any] = {"status": status}
        if notes:
            changes["admin_notes"] = notes
        if status == OrderStatus.DELIVERED.value:
            changes["delivered_at"] = datetime.utcnow()
        elif status == OrderStatus.CANCELLED.value:
            changes["cancelled_at"] = datetime.utcnow()
        order = OrderRepository(db).update(parse_object_id(order_id, "order"), changes)
        if not order:
            raise NotFoundError("Order not found")
        logger.info("admin_order_status order_id=%s status=%s", order_id, status)
        return OrderMapper.to_response(order)

    # ------------------ Chef bookings ------------------
    @staticmethod
    def _contacts(db: Database, ids) -> Dict[str, Dict[str, Any]]:
        oids = []
        for value in ids:
            try:
                oids.append(parse_object_id(value, "user"))
            except ServiceValidationError:
                continue
        users = UserRepository(db).find(
            {"_id": {"$in": oids}}, projection={"name": 1, "email": 1, "phone": 1}
        )
        return {str(u["_id"]): {"id": str(u["_id"]), **UserMapper.to_snapshot(u)} for u in users}

    @staticmethod
    def list_chef_bookings(
        db: Database,
        status: Optional[str] = None,
        chef_id: Optional[str] = None,
        customer_id: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if chef_id:
            query["chef_id"] = chef_id
        if customer_id:
            query["customer_id"] = customer_id

        repo = BookingRepository(db)
        total = repo.count(query)
        bookings = repo.find(
            query,
            sort=[("timeline.booked_at", DESCENDING)],
            skip=(page - 1) * limit,
            limit=limit,
        )
        contacts = AdminService._contacts(
            db,
            {b.get("chef_id") for b in bookings if b.get("chef_id")}
            | {b.get("customer_id") for b in bookings},
        )
        rows = []
        for booking in bookings:
            row = serialize_document(booking)
            row["chef"] = contacts.get(booking.get("chef_id")) if booking.get("chef_id") else None
            row["customer"] = contacts.get(booking.get("customer_id")) or booking.get("customer")
            rows.append(row)
        return {
            "bookings": rows,
            "pagination": _pagination(page, limit, total, len(rows)),
            "summary": repo.summary(),
        }

    @staticmethod
    def update_chef_booking(
        db: Database,
        booking_id: str,
        action: str,
        update_data: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Apply an admin action to a chef booking: cancel, complete or update.

        ``update`` takes dotted or nested keys under ``booking_details``,
        ``payment`` and ``pricing`` plus ``status`` and ``admin_notes``.
        """
        repo = BookingRepository(db)
        oid = parse_object_id(booking_id, "booking")
        if not repo.exists(oid):
            raise NotFoundError("Chef booking not found")

        now = datetime.utcnow()
        if action == "cancel":
            changes = {"status": BookingStatus.CANCELLED.value, "timeline.cancelled_at": now}
        elif action == "complete":
            changes = {"status": BookingStatus.COMPLETED.value, "timeline.completed_at": now}
        elif action == "update":
            changes = _flatten("", dict(update_data or {}))
            rejected = [
                k
                for k in changes
                if k not in BOOKING_UPDATABLE_FIELDS
                and not k.startswith(BOOKING_UPDATABLE_PREFIXES)
            ]
            if rejected:
                raise ServiceValidationError(
                    "These fields cannot be updated", details={"fields": rejected}
                )
            if "status" in changes and changes["status"] not in {s.value for s in BookingStatus}:
                raise ServiceValidationError(f"Invalid booking status: {changes['status']}")
            if not changes:
                raise ServiceValidationError("Nothing to update")
        else:
            raise ServiceValidationError("Invalid action")

        booking = repo.update(oid, changes)
        logger.info("admin_booking_updated booking_id=%s action=%s", booking_id, action)
        return serialize_document(booking)
