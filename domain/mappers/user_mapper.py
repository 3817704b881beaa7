"""
User domain mappers.
Handles transformation between user documents and API payloads.
"""

from typing import Any, Dict

from domain.mappers.document_mapper import serialize_document, serialize_value

PRIVATE_USER_FIELDS = ("password_hash", "google_id")


class UserMapper:
    """Mapper for user-related transformations."""

    @staticmethod
    def to_response(user: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert a user document to the public profile payload.

        Args:
            user: raw ``users`` document

        Returns:
            dict without credential fields
        """
        return serialize_document(user, exclude=PRIVATE_USER_FIELDS)

    @staticmethod
    def to_chef_card(chef: Dict[str, Any]) -> Dict[str, Any]:
        """Compact chef listing entry used by the chef-services catalogue."""
        profile = chef.get("chef_profile") or {}
        return {
            "id": str(chef["_id"]),
            "name": chef.get("name"),
            "email": chef.get("email"),
            "phone": chef.get("phone"),
            "specialization": profile.get("specialization") or [],
            "experience_years": profile.get("experience_years", 0),
            "bio": profile.get("bio"),
            "price_range": profile.get("price_range") or {},
            "rating": profile.get("rating", 0),
            "total_events": profile.get("total_events", 0),
            "location": profile.get("location") or {},
            "signature_dishes": (profile.get("portfolio") or {}).get(
                "signature_dishes", []
            ),
            "availability": serialize_value(profile.get("availability") or {}),
            "is_verified": (profile.get("verification") or {}).get(
                "is_verified", False
            ),
        }

    @staticmethod
    def to_snapshot(user: Dict[str, Any]) -> Dict[str, Any]:
        """Contact snapshot embedded into bookings"""
        return {
            "name": user.get("name"),
            "email": user.get("email"),
            "phone": user.get("phone"),
        }
