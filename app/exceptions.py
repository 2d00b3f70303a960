"""
Application error taxonomy.

Services raise these; the handlers registered in ``app.main`` turn them into
the standard ``{"success": false, "message", "error"}`` response envelope.
"""
from typing import Any, Optional


class AppError(Exception):
    """Base class for errors that map onto a client-visible response"""
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    # The clients treat a duplicate email as a plain 400
    status_code = 400
    code = "CONFLICT"


class InsufficientStockError(AppError):
    status_code = 400
    code = "INSUFFICIENT_STOCK"


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"


class InvalidTransitionError(AppError):
    status_code = 409
    code = "INVALID_TRANSITION"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class PermissionDeniedError(AppError):
    status_code = 403
    code = "FORBIDDEN"


class StoreError(AppError):
    """Persistence or blob storage failure"""
    status_code = 503
    code = "STORE_ERROR"
