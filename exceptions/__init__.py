"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    DatabaseError,

    # Stock requests
    PayloadError,
    InvalidPayloadError,
    InvalidItemsError,
    EmptyItemsError,
)

__all__ = [
    # Base
    "AppError",
    "DatabaseError",

    # Stock requests
    "PayloadError",
    "InvalidPayloadError",
    "InvalidItemsError",
    "EmptyItemsError",
]
