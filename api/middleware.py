"""
Consolidated middleware for the FoodFly API
"""

import time
import logging
from datetime import datetime
from uuid import uuid4

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from app.exceptions import FoodFlyError
from domain.mappers import serialize_value

logger = logging.getLogger("foodfly.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def error_body(message: str, code: str, details=None) -> dict:
    """Error envelope shared by every handler: ``{success, error, code, details?, timestamp}``"""
    body = {"success": False, "error": message, "code": code}
    if details:
        body["details"] = serialize_value(details)
    body["timestamp"] = datetime.utcnow().isoformat()
    return body


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "request_started request_id=%s method=%s path=%s client=%s",
            request_id,
            request.method,
            request.url.path,
            request.client.host if request.client else None,
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "request_completed request_id=%s method=%s path=%s status=%s duration=%.4fs",
                request_id,
                request.method,
                request.url.path,
                response.status_code,
                process_time,
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "request_failed request_id=%s method=%s path=%s error=%s duration=%.4fs",
                request_id,
                request.method,
                request.url.path,
                exc,
                process_time,
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors"""
    logger.warning(f"Validation error on {request.url.path}: {exc.errors()}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=error_body(
            "Request validation failed",
            "VALIDATION_ERROR",
            {"errors": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
                for e in exc.errors()
            ]},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), f"HTTP_{exc.status_code}"),
        headers=getattr(exc, "headers", None),
    )


async def foodfly_exception_handler(request: Request, exc: FoodFlyError):
    """Handle domain errors; the status comes from the exception class"""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(exc.message, exc.code, exc.details),
    )


async def duplicate_key_exception_handler(request: Request, exc: DuplicateKeyError):
    """Unique index violations surface as conflicts"""
    logger.warning(f"Duplicate key on {request.url.path}: {exc.details}")

    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body("Resource already exists", "DUPLICATE_KEY"),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url.path}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("An unexpected error occurred", "INTERNAL_SERVER_ERROR"),
    )
