"""
Custom exception classes for the application.

Exceptions are reserved for faults and request-level rejections. Expected
per-item failures travel as StepFailure values (see models.stock).
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "invalid_payload")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# STOCK REQUEST ERRORS
# ===================

class PayloadError(AppError):
    """
    Request body cannot be turned into a list of items (400).

    Codes: invalid_payload, invalid_items, empty_items.
    """

    def __init__(self, code: str, message: str):
        super().__init__(
            code=code,
            message=message,
            status_code=400
        )


class InvalidPayloadError(PayloadError):
    """Body is not a JSON object."""

    def __init__(self):
        super().__init__(
            code="invalid_payload",
            message="Request body must be a JSON object."
        )


class InvalidItemsError(PayloadError):
    """items field is present but not a list."""

    def __init__(self):
        super().__init__(
            code="invalid_items",
            message="items must be an array."
        )


class EmptyItemsError(PayloadError):
    """No items to process."""

    def __init__(self):
        super().__init__(
            code="empty_items",
            message="At least one stock update item is required."
        )
