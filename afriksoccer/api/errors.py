"""Errors raised by the backend client."""

from __future__ import annotations

from typing import Any

from afriksoccer.errors import AppError

GENERIC_MESSAGE = "An error occurred."
UNEXPECTED_MESSAGE = "An unexpected error occurred."


class ApiError(AppError):
    """A failed call to the backend.

    ``message`` is the backend's own message when it sent one.
    """

    def __init__(
        self,
        status: int,
        message: str,
        data: Any = None,
        is_network_error: bool = False,
    ):
        """Initialize the error."""
        super().__init__(message, status)
        self.status = status
        self.data = data
        self.is_network_error = is_network_error


class SchemaError(ApiError):
    """Raised when a backend payload does not have the expected shape."""

    def __init__(self, message: str, data: Any = None):
        """Initialize the error."""
        super().__init__(502, message, data)


class SessionExpiredError(AppError):
    """Raised when the backend rejects the token sent with a request."""

    def __init__(self, message="Your session has expired. Please log in again."):
        """Initialize the error."""
        super().__init__(message, 401)
