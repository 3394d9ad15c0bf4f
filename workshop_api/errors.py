"""
Error types raised by the store adapter and the request handlers.

Every error maps onto one HTTP status; ``app.create_app`` renders them as
``{"error": message}``.
"""

from __future__ import annotations


class WorkshopApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidBody(WorkshopApiError):
    """Request payload is not valid JSON or not the expected shape."""

    status_code = 400
    default_message = "Invalid request body"


class Unauthorized(WorkshopApiError):
    status_code = 401
    default_message = "Invalid password"


class StoreError(WorkshopApiError):
    """
    Failure surfaced by the document store.

    The underlying error text is passed through to the client unchanged.
    """

    status_code = 500
    default_message = "Document store error"


class StoreUnavailable(StoreError):
    """Collection could not be enumerated."""


class StoreWriteError(StoreError):
    """Add, set or delete failed."""
