"""
API dependencies for dependency injection
"""

from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from pymongo.database import Database

from adapters import mongo_adapter
from app.exceptions import ForbiddenError, ServiceValidationError, UnauthorizedError
from domain.enums import UserRole
from repositories import guest_owner, user_owner
from services.auth_service import decode_access_token

TOKEN_COOKIE = "token"
ADMIN_TOKEN_COOKIE = "admin-token"
GUEST_CART_HEADER = "X-Cart-Token"


def get_db() -> Database:
    """
    Database dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Database = Depends(get_db)):
            # Use db here
            pass
    """
    return mongo_adapter.get_db()


def _extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the ``token`` / ``admin-token`` cookies"""
    auth = (request.headers.get("Authorization") or "").strip()
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        if token:
            return token
    return request.cookies.get(TOKEN_COOKIE) or request.cookies.get(ADMIN_TOKEN_COOKIE)


def get_optional_user(request: Request) -> Optional[Dict[str, Any]]:
    """Token claims when a token is present; an invalid token still fails with 401"""
    token = _extract_token(request)
    if not token:
        return None
    return decode_access_token(token)


def get_current_user(request: Request) -> Dict[str, Any]:
    """Claims ``{user_id, role, email}`` of the authenticated caller"""
    token = _extract_token(request)
    if not token:
        raise UnauthorizedError("Authentication token required")
    return decode_access_token(token)


def require_role(role: UserRole) -> Callable[..., Dict[str, Any]]:
    """Dependency factory: 403 "<Role> access required" for any other role"""

    def checker(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if user.get("role") != role.value:
            raise ForbiddenError(f"{role.value.capitalize()} access required")
        return user

    return checker


require_admin = require_role(UserRole.ADMIN)
require_chef = require_role(UserRole.CHEF)


def get_cart_owner(
    request: Request, user: Optional[Dict[str, Any]] = Depends(get_optional_user)
) -> str:
    """Signed-in callers own ``user:<id>``; guests identify with the X-Cart-Token header"""
    if user:
        return user_owner(user["user_id"])
    guest_token = request.headers.get(GUEST_CART_HEADER)
    if not guest_token:
        raise ServiceValidationError(
            f"Sign in or send an {GUEST_CART_HEADER} header to use the cart"
        )
    return guest_owner(guest_token)


def get_request_meta(request: Request) -> Dict[str, Any]:
    forwarded = request.headers.get("x-forwarded-for")
    return {
        "ip_address": forwarded.split(",")[0].strip() if forwarded else None,
        "user_agent": request.headers.get("user-agent"),
    }
