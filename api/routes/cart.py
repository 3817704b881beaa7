"""Cart routes for signed-in users and guests"""

from fastapi import APIRouter, Depends
from pymongo.database import Database
import logging

from api.dependencies import get_cart_owner, get_db
from api.responses import success_response
from domain.schemas.cart_schemas import CartItemAdd, CartItemQuantityUpdate
from services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["Cart"])
logger = logging.getLogger("foodfly.api.cart")


@router.get("")
def get_cart(owner: str = Depends(get_cart_owner), db: Database = Depends(get_db)):
    return success_response(CartService.get_cart(db, owner))


@router.post("")
def add_to_cart(
    payload: CartItemAdd,
    owner: str = Depends(get_cart_owner),
    db: Database = Depends(get_db),
):
    """Add an item; an item from a different restaurant starts a new cart"""
    cart = CartService.add_item(
        db, owner, payload.menu_item_id, payload.quantity, payload.customizations
    )
    return success_response(cart, "Item added to cart")


@router.delete("")
def clear_cart(owner: str = Depends(get_cart_owner), db: Database = Depends(get_db)):
    return success_response(CartService.clear(db, owner), "Cart cleared")


@router.put("/items/{menu_item_id}")
def update_cart_item(
    menu_item_id: str,
    payload: CartItemQuantityUpdate,
    owner: str = Depends(get_cart_owner),
    db: Database = Depends(get_db),
):
    cart = CartService.update_quantity(db, owner, menu_item_id, payload.quantity)
    return success_response(cart, "Cart updated")


@router.delete("/items/{menu_item_id}")
def remove_cart_item(
    menu_item_id: str,
    owner: str = Depends(get_cart_owner),
    db: Database = Depends(get_db),
):
    cart = CartService.remove_item(db, owner, menu_item_id)
    return success_response(cart, "Item removed from cart")
