"""
Domain enums for FoodFly application.
Contains all enumeration types used across the domain documents.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    CUSTOMER = "customer"
    CHEF = "chef"
    DELIVERY = "delivery"
    ADMIN = "admin"


class ChefAvailability(str, enum.Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    OFFLINE = "offline"


class PartnerAvailability(str, enum.Enum):
    ONLINE = "online"
    BUSY = "busy"
    OFFLINE = "offline"


class BookingStatus(str, enum.Enum):
    """Chef booking lifecycle"""

    PENDING = "pending"
    PENDING_CHEF_ASSIGNMENT = "pending_chef_assignment"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that block a chef's calendar day and prevent deleting the chef
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.PENDING.value,
    BookingStatus.CONFIRMED.value,
    BookingStatus.IN_PROGRESS.value,
)


class OrderStatus(str, enum.Enum):
    """Food order lifecycle"""

    PLACED = "placed"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


CANCELLABLE_ORDER_STATUSES = (OrderStatus.PLACED.value, OrderStatus.CONFIRMED.value)


class PaymentMethod(str, enum.Enum):
    COD = "cod"
    ONLINE = "online"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class VenueType(str, enum.Enum):
    """Where a chef event takes place"""

    CUSTOMER_HOME = "customer_home"
    EVENT_VENUE = "event_venue"
    OTHER = "other"


class MessageType(str, enum.Enum):
    SYSTEM_UPDATE = "system_update"
    MESSAGE = "message"
