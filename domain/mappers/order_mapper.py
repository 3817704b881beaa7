"""
Order domain mappers.
"""

from typing import Any, Dict, Optional

from domain.mappers.document_mapper import serialize_value


class OrderMapper:
    """Mapper for order transformations."""

    @staticmethod
    def to_summary(order: Dict[str, Any]) -> Dict[str, Any]:
        """Row for order lists"""
        return {
            "id": str(order["_id"]),
            "order_number": order.get("order_number"),
            "restaurant_id": order.get("restaurant_id"),
            "restaurant_name": order.get("restaurant_name"),
            "total_amount": order.get("total_amount"),
            "status": order.get("status"),
            "payment_method": order.get("payment_method"),
            "item_count": sum(i.get("quantity", 0) for i in order.get("items", [])),
            "placed_at": serialize_value(order.get("placed_at")),
            "estimated_delivery_time": serialize_value(
                order.get("estimated_delivery_time")
            ),
        }

    @staticmethod
    def to_response(
        order: Dict[str, Any], restaurant: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Convert an order document into the detail payload.

        Items carry a nested ``menu_item`` block and the order carries a
        ``restaurant`` block, falling back to the names stored on the order
        when the restaurant is no longer in the catalogue.

        Args:
            order: raw ``orders`` document
            restaurant: catalogue restaurant document, if found

        Returns:
            JSON-safe dict
        """
        restaurant = restaurant or {}
        items = [
            {
                "menu_item": {
                    "id": item.get("menu_item_id"),
                    "name": item.get("name"),
                    "description": item.get("description"),
                    "price": item.get("price"),
                    "image": item.get("image"),
                },
                "quantity": item.get("quantity"),
                "price": item.get("price"),
                "customizations": item.get("customizations") or [],
            }
            for item in order.get("items", [])
        ]
        return {
            "id": str(order["_id"]),
            "order_number": order.get("order_number"),
            "customer_id": order.get("customer_id"),
            "restaurant": {
                "id": order.get("restaurant_id"),
                "name": restaurant.get("name") or order.get("restaurant_name"),
                "image": restaurant.get("image"),
                "location": restaurant.get("location"),
            },
            "items": items,
            "subtotal": order.get("subtotal"),
            "delivery_fee": order.get("delivery_fee"),
            "taxes": order.get("taxes"),
            "total_amount": order.get("total_amount"),
            "status": order.get("status"),
            "payment_method": order.get("payment_method"),
            "payment_status": order.get("payment_status"),
            "delivery_address": order.get("delivery_address"),
            "special_instructions": order.get("special_instructions"),
            "estimated_delivery_time": serialize_value(
                order.get("estimated_delivery_time")
            ),
            "placed_at": serialize_value(order.get("placed_at")),
            "delivered_at": serialize_value(order.get("delivered_at")),
            "cancelled_at": serialize_value(order.get("cancelled_at")),
            "cancellation_reason": order.get("cancellation_reason"),
            "rating": order.get("rating"),
            "review": order.get("review"),
        }
