"""Backend API access."""

from flask import current_app, session

from afriksoccer.constants import SESSION_TOKEN

from .client import BackendClient
from .errors import ApiError, SchemaError, SessionExpiredError


def get_client() -> BackendClient:
    """Build a client from the app config and the logged-in user's token."""
    return BackendClient(
        base_url=current_app.config["API_URL"],
        token=session.get(SESSION_TOKEN),
        timeout=current_app.config["API_TIMEOUT"],
    )


__all__ = ["ApiError", "BackendClient", "SchemaError", "SessionExpiredError", "get_client"]
