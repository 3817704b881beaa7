"""Authentication routes: email/password and Google sign-in"""

from fastapi import APIRouter, Depends, status
from pymongo.database import Database
import logging

from api.dependencies import get_db
from api.responses import success_response
from domain.schemas.auth_schemas import GoogleLoginRequest, LoginRequest, RegisterRequest
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("foodfly.api.auth")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Database = Depends(get_db)):
    """Create a customer account; returns the user and a bearer token"""
    session = AuthService.register(
        db, payload.name, payload.email, payload.password, payload.phone
    )
    return success_response(session, "Registration successful")


@router.post("/login")
def login(payload: LoginRequest, db: Database = Depends(get_db)):
    """
    Sign in with email and password.

    Passing ``guest_cart_token`` moves the guest cart onto the account when
    the account's cart is empty.
    """
    session = AuthService.login(
        db, payload.email, payload.password, payload.guest_cart_token
    )
    return success_response(session, "Login successful")


@router.post("/google")
def google_login(payload: GoogleLoginRequest, db: Database = Depends(get_db)):
    """Sign in with a Google ID token (creates the account on first use)"""
    session = AuthService.google_login(db, payload.credential, payload.guest_cart_token)
    return success_response(session, "Google login successful")
