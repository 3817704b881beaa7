"""
Chef Booking Repository - Data access layer for chef bookings and general requests
"""

from typing import Any, Dict, List, Mapping, Optional
from datetime import datetime, timedelta

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import ReturnDocument

from repositories.base import BaseRepository, Document
from domain.enums import ACTIVE_BOOKING_STATUSES, BookingStatus


class BookingRepository(BaseRepository[ObjectId]):
    """Repository for chef booking data access"""

    collection_name = "chef_bookings"

    def find_day_conflict(self, chef_id: str, event_date: datetime) -> Optional[Document]:
        """Active booking of ``chef_id`` on the same calendar day, if any"""
        day_start = datetime(event_date.year, event_date.month, event_date.day)
        return self.collection.find_one(
            {
                "chef_id": chef_id,
                "booking_details.event_date": {
                    "$gte": day_start,
                    "$lt": day_start + timedelta(days=1),
                },
                "status": {"$in": list(ACTIVE_BOOKING_STATUSES)},
            }
        )

    def has_active_for_chef(self, chef_id: str) -> bool:
        return (
            self.collection.count_documents(
                {"chef_id": chef_id, "status": {"$in": list(ACTIVE_BOOKING_STATUSES)}},
                limit=1,
            )
            > 0
        )

    def list_for_participant(
        self,
        user_id: str,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[Document]:
        """Bookings where the user is the customer or the chef, newest first"""
        return self.find(
            self._participant_query(user_id, status),
            sort=[("created_at", DESCENDING)],
            skip=skip,
            limit=limit,
        )

    def count_for_participant(self, user_id: str, status: Optional[str] = None) -> int:
        return self.count(self._participant_query(user_id, status))

    @staticmethod
    def _participant_query(user_id: str, status: Optional[str]) -> Dict[str, Any]:
        query: Dict[str, Any] = {"$or": [{"customer_id": user_id}, {"chef_id": user_id}]}
        if status:
            query["status"] = status
        return query

    def list_for_customer(self, customer_id: str) -> List[Document]:
        return self.find(
            {"customer_id": customer_id}, sort=[("timeline.booked_at", DESCENDING)]
        )

    def list_open_general_requests(self, limit: int = 0) -> List[Document]:
        """Unassigned requests still waiting for a chef, newest first"""
        return self.find(
            {
                "chef_id": None,
                "status": BookingStatus.PENDING_CHEF_ASSIGNMENT.value,
            },
            sort=[("timeline.booked_at", DESCENDING)],
            limit=limit,
        )

    def list_chef_upcoming(self, chef_id: str, limit: int = 0) -> List[Document]:
        return self.find(
            {
                "chef_id": chef_id,
                "status": {
                    "$in": [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]
                },
            },
            sort=[("timeline.booked_at", DESCENDING)],
            limit=limit,
        )

    def claim_general_request(
        self,
        request_id: ObjectId,
        chef_id: str,
        changes: Mapping[str, Any],
        message: Document,
    ) -> Optional[Document]:
        """
        Assign an open general request to ``chef_id``.

        The filter only matches while the request is unassigned and pending,
        so MongoDB's single-document atomicity lets exactly one concurrent
        caller win. Losers get None.

        Args:
            request_id: booking ``_id``
            chef_id: accepting chef (string id)
            changes: extra ``$set`` fields (status, chef snapshot, timeline, price)
            message: entry appended to ``communication.messages``

        Returns:
            The updated booking, or None when no open request matched
        """
        return self.collection.find_one_and_update(
            {
                "_id": request_id,
                "chef_id": None,
                "status": BookingStatus.PENDING_CHEF_ASSIGNMENT.value,
            },
            {
                "$set": {"chef_id": chef_id, **changes},
                "$push": {"communication.messages": message},
            },
            return_document=ReturnDocument.AFTER,
        )

    def stats_by_chef(self, chef_ids: List[str]) -> Dict[str, Dict[str, Any]]:
        """
        Per-chef booking totals.

        Returns:
            {chef_id: {"total_bookings", "completed_bookings", "total_revenue",
            "avg_rating"}}; ``avg_rating`` is None when no booking was rated
        """
        stats: Dict[str, Dict[str, Any]] = {
            cid: {"total_bookings": 0, "completed_bookings": 0, "total_revenue": 0}
            for cid in chef_ids
        }
        ratings: Dict[str, List[float]] = {cid: [] for cid in chef_ids}
        if chef_ids:
            cursor = self.collection.find(
                {"chef_id": {"$in": chef_ids}},
                {"chef_id": 1, "status": 1, "pricing.total_amount": 1, "rating": 1},
            )
            for booking in cursor:
                entry = stats[booking["chef_id"]]
                entry["total_bookings"] += 1
                if booking.get("status") == BookingStatus.COMPLETED.value:
                    entry["completed_bookings"] += 1
                    entry["total_revenue"] += _amount(booking)
                if isinstance(booking.get("rating"), (int, float)):
                    ratings[booking["chef_id"]].append(booking["rating"])
        for cid, values in ratings.items():
            stats[cid]["avg_rating"] = sum(values) / len(values) if values else None
        return stats

    def summary(self, query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Counts per status, completed revenue and average rating over ``query``"""
        counts = {status.value: 0 for status in BookingStatus}
        revenue = 0
        ratings = []
        cursor = self.collection.find(
            dict(query or {}), {"status": 1, "pricing.total_amount": 1, "rating": 1}
        )
        for booking in cursor:
            status = booking.get("status")
            counts[status] = counts.get(status, 0) + 1
            if status == BookingStatus.COMPLETED.value:
                revenue += _amount(booking)
            if isinstance(booking.get("rating"), (int, float)):
                ratings.append(booking["rating"])
        return {
            "total_bookings": sum(counts.values()),
            "by_status": counts,
            "total_revenue": revenue,
            "avg_rating": round(sum(ratings) / len(ratings), 1) if ratings else 0,
        }


def _amount(booking: Document) -> float:
    return (booking.get("pricing") or {}).get("total_amount", 0) or 0
