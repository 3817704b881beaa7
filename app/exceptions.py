from typing import Any, Mapping, Optional


class FoodFlyError(Exception):
    """Base class for errors that map onto an HTTP response.

    Attributes:
        message: human-readable message, sent to the client as ``error``
        details: optional mapping with extra context (field errors, ids)
        code: machine-readable error code
        http_status: HTTP status code used by the exception handlers
    """

    http_status = 500
    default_message = "Internal server error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
        code: Optional[str] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(FoodFlyError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "SERVICE_VALIDATION_ERROR"


class UnauthorizedError(FoodFlyError):
    """Raised when the caller is not authenticated (missing, invalid or expired token)."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(FoodFlyError):
    """Raised when an authenticated caller lacks the role or ownership required."""

    http_status = 403
    default_message = "Access denied"
    default_code = "FORBIDDEN"


class NotFoundError(FoodFlyError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class ConflictError(FoodFlyError):
    """Raised when a resource conflict occurs (duplicate entry, lost race, wrong state)."""

    http_status = 409
    default_message = "Conflict"
    default_code = "CONFLICT"


class ExternalServiceError(FoodFlyError):
    """Raised when a third-party API (Google, Unsplash, Cloudinary) fails or is not configured."""

    http_status = 502
    default_message = "External service error"
    default_code = "EXTERNAL_SERVICE_ERROR"
