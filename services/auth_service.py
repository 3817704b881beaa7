from typing import Any, Dict, Optional
from datetime import datetime, timedelta
import logging

import httpx
import jwt
from pwdlib import PasswordHash
from pymongo.database import Database

from app.config import settings
from app.exceptions import (
    ExternalServiceError,
    ForbiddenError,
    UnauthorizedError,
)
from domain.enums import UserRole
from domain.mappers import UserMapper
from repositories import UserRepository, guest_owner, user_owner
from services.cart_service import CartService

logger = logging.getLogger("foodfly.auth")

password_hash = PasswordHash.recommended()


def hash_password(password: str) -> str:
    return password_hash.hash(password)


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    return password_hash.verify(password, hashed)


def create_access_token(user: Dict[str, Any]) -> str:
    """HS256 token carrying the user's id, role and email."""
    expires = datetime.utcnow() + timedelta(hours=settings.jwt_lifetime_hours)
    claims = {
        "user_id": str(user["_id"]),
        "role": user.get("role", UserRole.CUSTOMER.value),
        "email": user.get("email"),
        "exp": expires,
    }
    return jwt.encode(
        claims,
        settings.jwt_secret.get_secret_value(),
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Dict[str, Any]:
    """Decode and verify a token.

    Raises:
        UnauthorizedError: "Invalid token" when the signature, shape or expiry is wrong
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as e:
        logger.debug("token_rejected reason=%s", e)
        raise UnauthorizedError("Invalid token")
    if not claims.get("user_id") or not claims.get("role"):
        raise UnauthorizedError("Invalid token")
    return claims


class AuthService:
    @staticmethod
    def _session(db: Database, user: Dict[str, Any], guest_cart_token: Optional[str]):
        if guest_cart_token:
            CartService.adopt_guest_cart(
                db, guest_owner(guest_cart_token), user_owner(str(user["_id"]))
            )
        return {"user": UserMapper.to_response(user), "token": create_access_token(user)}

    @staticmethod
    def register(
        db: Database,
        name: str,
        email: str,
        password: str,
        phone: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a customer account and return ``{user, token}``.

        Raises:
            ConflictError: email already registered
        """
        user_repo = UserRepository(db)
        user = user_repo.create_user(
            {
                "name": name.strip(),
                "email": email.lower(),
                "password_hash": hash_password(password),
                "phone": phone,
                "role": UserRole.CUSTOMER.value,
                "is_email_verified": False,
            }
        )
        logger.info("user_registered user_id=%s", user["_id"])
        return AuthService._session(db, user, None)

    @staticmethod
    def login(
        db: Database,
        email: str,
        password: str,
        guest_cart_token: Optional[str] = None,
    ) -> Dict[str, Any]:
        user = UserRepository(db).get_by_email(email)
        if not user or not verify_password(password, user.get("password_hash")):
            logger.info("login_failed email=%s", email)
            raise UnauthorizedError("Invalid email or password")
        logger.info("login_succeeded user_id=%s role=%s", user["_id"], user.get("role"))
        return AuthService._session(db, user, guest_cart_token)

    @staticmethod
    def verify_google_credential(credential: str) -> Dict[str, Any]:
        """
        Validate a Google ID token against Google's tokeninfo endpoint.

        Raises:
            ExternalServiceError: no client id configured, or Google unreachable
            UnauthorizedError: token rejected, issued for another client, or incomplete
        """
        if not settings.google_client_id:
            raise ExternalServiceError("Google sign-in is not configured")
        try:
            with httpx.Client(timeout=settings.http_timeout_sec) as client:
                response = client.get(
                    settings.google_tokeninfo_url, params={"id_token": credential}
                )
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Google token verification failed: {e}")
        if response.status_code != 200:
            raise UnauthorizedError("Invalid Google credential")
        info = response.json()
        if info.get("aud") != settings.google_client_id:
            raise UnauthorizedError("Google credential was issued for another client")
        if not info.get("email") or not info.get("sub"):
            raise UnauthorizedError("Invalid Google credential")
        return info

    @staticmethod
    def google_login(
        db: Database, credential: str, guest_cart_token: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Sign in with Google.

        A known google id signs straight in. Otherwise the account is linked
        or created by email, which Google must have verified.
        """
        info = AuthService.verify_google_credential(credential)
        user_repo = UserRepository(db)
        user = user_repo.get_by_google_id(info["sub"])
        if user is None:
            if str(info.get("email_verified", "")).lower() != "true":
                logger.warning(
                    "google_login_refused reason=unverified_email sub=%s", info["sub"]
                )
                raise UnauthorizedError("Google account email is not verified")
            user = user_repo.get_by_email(info["email"])
            if user is None:
                user = user_repo.create_user(
                    {
                        "name": info.get("name") or info["email"].split("@")[0],
                        "email": info["email"].lower(),
                        "password_hash": None,
                        "phone": None,
                        "role": UserRole.CUSTOMER.value,
                        "google_id": info["sub"],
                        "avatar": info.get("picture"),
                        "is_email_verified": True,
                    }
                )
                logger.info("google_user_created user_id=%s", user["_id"])
            else:
                user = user_repo.update(
                    user["_id"], {"google_id": info["sub"], "is_email_verified": True}
                )
                logger.info("google_account_linked user_id=%s", user["_id"])
        return AuthService._session(db, user, guest_cart_token)

    @staticmethod
    def admin_login(db: Database, email: str, password: str) -> Dict[str, Any]:
        user = UserRepository(db).get_by_email(email)
        if not user or not verify_password(password, user.get("password_hash")):
            raise UnauthorizedError("Invalid email or password")
        if user.get("role") != UserRole.ADMIN.value:
            logger.warning("admin_login_refused user_id=%s", user["_id"])
            raise ForbiddenError("Admin access required")
        logger.info("admin_login user_id=%s", user["_id"])
        return {"user": UserMapper.to_response(user), "token": create_access_token(user)}
