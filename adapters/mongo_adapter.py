"""MongoDB adapter: owns the shared client and the collection indexes.
"""

from typing import Optional
import logging
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from app.config import settings

logger = logging.getLogger("foodfly.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


# ------------------ Connection ------------------
def connect(uri: str, db_name: str = "foodfly") -> Database:
    """Open the client and verify the server answers a ping.

    Raises the underlying pymongo error so the caller can retry.
    """
    global _client, _db
    client = MongoClient(uri, serverSelectionTimeoutMS=5000, tz_aware=False)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    _client = client
    _db = client[db_name]
    logger.info("Connected to MongoDB %s (database: %s)", uri, db_name)
    return _db


def get_db() -> Database:
    """Return the connected database, lazily creating a client if needed."""
    global _client, _db
    if _db is not None:
        return _db
    _client = MongoClient(settings.mongo_uri, tz_aware=False)
    _db = _client[settings.mongo_db_name]
    logger.debug("Lazily initialised MongoDB client for %s", settings.mongo_db_name)
    return _db


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    finally:
        _client = None
        _db = None


def is_connected() -> bool:
    if _client is None:
        return False
    try:
        _client.admin.command("ping")
        return True
    except Exception as exc:
        logger.warning("MongoDB ping failed: %s", exc)
        return False


# ------------------ Indexes ------------------
def ensure_indexes(db: Database) -> None:
    """Create the indexes the repositories rely on (idempotent)."""
    db.users.create_index([("email", ASCENDING)], unique=True, name="uniq_email")
    db.users.create_index([("role", ASCENDING)], name="role")
    db.users.create_index(
        [("google_id", ASCENDING)], sparse=True, name="google_id"
    )

    db.chef_bookings.create_index(
        [
            ("chef_id", ASCENDING),
            ("booking_details.event_date", ASCENDING),
            ("status", ASCENDING),
        ],
        name="chef_day_status",
    )
    db.chef_bookings.create_index(
        [("status", ASCENDING), ("timeline.booked_at", DESCENDING)],
        name="status_booked_at",
    )
    db.chef_bookings.create_index(
        [("customer_id", ASCENDING), ("created_at", DESCENDING)],
        name="customer_created",
    )

    db.orders.create_index(
        [("order_number", ASCENDING)], unique=True, name="uniq_order_number"
    )
    db.orders.create_index(
        [("customer_id", ASCENDING), ("created_at", DESCENDING)],
        name="customer_created",
    )

    db.carts.create_index([("owner", ASCENDING)], unique=True, name="uniq_owner")
    db.menu_items.create_index(
        [("restaurant_id", ASCENDING)], name="restaurant"
    )
    db.menu_items.create_index([("category_key", ASCENDING)], name="category_key")
    logger.info("MongoDB indexes ensured")
