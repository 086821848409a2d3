"""Domain errors raised by services and rendered into the response envelope"""

from typing import Any, Optional

from fastapi import HTTPException


class ApiError(HTTPException):
    """Base class for errors that map to a fixed HTTP status"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, data: Any = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=type(self).status_code,
            detail=message or self.default_message,
            headers=headers,
        )
        self.data = data


class ValidationError(ApiError):
    status_code = 400
    default_message = "Incomplete or invalid data"


class InvalidCredentials(ApiError):
    status_code = 401
    default_message = "Invalid username or password"


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Not authenticated"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You do not have access to this resource"


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class AlreadyAcknowledged(ApiError):
    status_code = 400
    default_message = "Schedule was already acknowledged"


class InternalError(ApiError):
    status_code = 500
    default_message = "Internal server error"
