from typing import Any, Dict, List
import logging

from pymongo.database import Database

from app.exceptions import NotFoundError
from repositories import CartRepository, MenuItemRepository, RestaurantRepository

logger = logging.getLogger("foodfly.cart")


class CartService:
    """Server-side carts keyed by owner (``user:<id>`` or ``guest:<token>``)."""

    @staticmethod
    def to_response(cart: Dict[str, Any]) -> Dict[str, Any]:
        items = cart.get("items") or []
        return {
            "restaurant_id": cart.get("restaurant_id"),
            "restaurant_name": cart.get("restaurant_name"),
            "items": items,
            "subtotal": round(sum(i["price"] * i["quantity"] for i in items), 2),
            "total_items": sum(i["quantity"] for i in items),
        }

    @staticmethod
    def _empty() -> Dict[str, Any]:
        return {"restaurant_id": None, "restaurant_name": None, "items": []}

    @staticmethod
    def get_cart(db: Database, owner: str) -> Dict[str, Any]:
        cart = CartRepository(db).get_by_owner(owner) or CartService._empty()
        return CartService.to_response(cart)

    @staticmethod
    def add_item(
        db: Database,
        owner: str,
        menu_item_id: str,
        quantity: int = 1,
        customizations: List[str] = None,
    ) -> Dict[str, Any]:
        """
        Add a menu item to the cart.

        A cart holds items from one restaurant; adding an item from another
        restaurant starts a fresh cart. The same item with the same
        customizations is merged by quantity.

        Raises:
            NotFoundError: unknown menu item
        """
        menu_item = MenuItemRepository(db).get_by_id(menu_item_id)
        if not menu_item:
            raise NotFoundError(f"Menu item {menu_item_id} not found")
        restaurant = RestaurantRepository(db).get_by_id(menu_item["restaurant_id"]) or {}

        cart_repo = CartRepository(db)
        cart = cart_repo.get_by_owner(owner) or CartService._empty()
        items = list(cart.get("items") or [])
        if cart.get("restaurant_id") and cart["restaurant_id"] != menu_item["restaurant_id"]:
            logger.info(
                "cart_restaurant_switched owner=%s from=%s to=%s",
                owner,
                cart["restaurant_id"],
                menu_item["restaurant_id"],
            )
            items = []

        customizations = sorted(customizations or [])
        for item in items:
            if (
                item["menu_item_id"] == menu_item_id
                and item.get("customizations", []) == customizations
            ):
                item["quantity"] += quantity
                break
        else:
            items.append(
                {
                    "menu_item_id": menu_item_id,
                    "name": menu_item["name"],
                    "price": menu_item["price"],
                    "image": menu_item.get("image"),
                    "quantity": quantity,
                    "customizations": customizations,
                }
            )
        saved = cart_repo.save(
            owner, items, menu_item["restaurant_id"], restaurant.get("name")
        )
        return CartService.to_response(saved)

    @staticmethod
    def update_quantity(
        db: Database, owner: str, menu_item_id: str, quantity: int
    ) -> Dict[str, Any]:
        """Set an item's quantity; 0 removes it"""
        cart_repo = CartRepository(db)
        cart = cart_repo.get_by_owner(owner)
        if not cart or not any(i["menu_item_id"] == menu_item_id for i in cart["items"]):
            raise NotFoundError(f"Menu item {menu_item_id} is not in the cart")
        items = []
        for item in cart["items"]:
            if item["menu_item_id"] == menu_item_id:
                if quantity <= 0:
                    continue
                item["quantity"] = quantity
            items.append(item)
        restaurant_id = cart.get("restaurant_id") if items else None
        restaurant_name = cart.get("restaurant_name") if items else None
        saved = cart_repo.save(owner, items, restaurant_id, restaurant_name)
        return CartService.to_response(saved)

    @staticmethod
    def remove_item(db: Database, owner: str, menu_item_id: str) -> Dict[str, Any]:
        return CartService.update_quantity(db, owner, menu_item_id, 0)

    @staticmethod
    def clear(db: Database, owner: str) -> Dict[str, Any]:
        CartRepository(db).delete_by_owner(owner)
        return CartService.to_response(CartService._empty())

    @staticmethod
    def adopt_guest_cart(db: Database, guest: str, user: str) -> bool:
        """
        Move a guest cart onto a user's cart after sign-in.

        The guest items are copied only when the user's cart is empty; the
        guest cart is dropped either way.

        Returns:
            True when items were copied
        """
        cart_repo = CartRepository(db)
        guest_cart = cart_repo.get_by_owner(guest)
        if not guest_cart:
            return False
        user_cart = cart_repo.get_by_owner(user)
        adopted = False
        if guest_cart.get("items") and not (user_cart or {}).get("items"):
            cart_repo.save(
                user,
                guest_cart["items"],
                guest_cart.get("restaurant_id"),
                guest_cart.get("restaurant_name"),
            )
            adopted = True
        cart_repo.delete_by_owner(guest)
        logger.info("guest_cart_adopted guest=%s user=%s copied=%s", guest, user, adopted)
        return adopted
