"""Domain errors raised by the managers and the storage layer.

The API layer maps these onto HTTP status codes (see api/error_handlers.py).
"""
from typing import Any, Optional


class MovePlannerError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(MovePlannerError):
    """Missing or malformed input."""
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(MovePlannerError):
    """Row does not exist, or belongs to another user. The two cases are reported identically."""
    status_code = 404
    default_message = "Not found"


class StorageError(MovePlannerError):
    """Any failure of the underlying database. Detail is logged, never returned to the caller."""
    status_code = 500
    default_message = "Database error"
