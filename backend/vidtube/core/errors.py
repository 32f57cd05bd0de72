"""Error taxonomy.

Every failure is raised where it is detected and turned into the JSON
error envelope by the handlers registered in ``vidtube.main``.
"""
from typing import Any, List, Optional


class ApiError(Exception):
    """Base API error carrying an HTTP status code."""

    status_code: int = 500
    default_message: str = "Something went wrong"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Any]] = None, status_code: Optional[int] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidArgumentError(ApiError):
    """Malformed identifier or missing/invalid field."""
    status_code = 400
    default_message = "Invalid argument"


class InvalidOperationError(ApiError):
    """Well-formed request that the domain rules reject."""
    status_code = 400
    default_message = "Invalid operation"


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Unauthorized request"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Resource already exists"
