"""HTTP client for the tournament backend."""

from __future__ import annotations

import logging
from typing import Any

import requests

from afriksoccer.bracket.models import Match, Tournament

from .errors import (
    GENERIC_MESSAGE,
    UNEXPECTED_MESSAGE,
    ApiError,
    SchemaError,
    SessionExpiredError,
)
from .schemas import parse_match, parse_matches, parse_tournament

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT = 10.0
BRACKET_GENERATED_MESSAGE = "The tournament bracket was generated successfully."


class BackendClient:
    """Thin JSON client over the backend REST API.

    Errors are raised as :class:`ApiError`; nothing is retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client."""
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def _headers(self) -> dict[str, str]:
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def request(
        self, method: str, path: str, json: Any = None, authenticated: bool = True
    ) -> Any:
        """Send a request and return the decoded JSON body.

        A 401 on a request that carried a token raises SessionExpiredError.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                headers=self._headers() if authenticated else {},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise ApiError(500, GENERIC_MESSAGE, is_network_error=True) from e

        try:
            data = response.json() if response.content else None
        except ValueError:
            data = None
            if response.ok:
                raise SchemaError(f"{method} {path}: response is not JSON") from None

        if not response.ok:
            message = GENERIC_MESSAGE
            if isinstance(data, dict) and data.get("message"):
                message = str(data["message"])
            if response.status_code == 401 and authenticated and self.token:  # noqa: PLR2004
                logger.warning(f"{method} {url} rejected the session token")
                raise SessionExpiredError()
            logger.error(f"{method} {url} returned {response.status_code}: {message}")
            raise ApiError(response.status_code, message, data)

        return data

    def list_tournaments(self) -> list[Tournament]:
        """Fetch every tournament."""
        data = self.request("GET", "/tournaments")
        if not isinstance(data, dict) or not isinstance(data.get("tournaments", []), list):
            raise SchemaError("tournaments: expected a 'tournaments' list", data)
        return [parse_tournament(t) for t in data.get("tournaments", [])]

    def get_tournament(self, tournament_id: str) -> Tournament:
        """Fetch a tournament with its players and persisted matches."""
        data = self.request("GET", f"/admin/tournaments/{tournament_id}")
        return parse_tournament(data)

    def get_bracket(self, tournament_id: str) -> list[Match]:
        """Fetch the persisted bracket; an unknown bracket is empty."""
        try:
            data = self.request("GET", f"/tournaments/{tournament_id}/bracket")
        except ApiError as e:
            if e.status == 404:  # noqa: PLR2004
                return []
            raise
        return parse_matches(data or [])

    def bracket_exists(self, tournament_id: str) -> bool:
        """Return True when the backend holds at least one bracket match."""
        try:
            return len(self.get_bracket(tournament_id)) > 0
        except ApiError as e:
            logger.warning(f"Could not check bracket for {tournament_id}: {e.message}")
            return False

    def generate_bracket(self, tournament_id: str) -> str:
        """Ask the backend to generate the bracket; return its message."""
        data = self.request("POST", f"/tournaments/{tournament_id}/bracket/generate")
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return BRACKET_GENERATED_MESSAGE

    def submit_match_result(self, match_id: str, payload: dict[str, Any]) -> Match | None:
        """Write a match result (date, time, scores) to the backend."""
        data = self.request("PUT", f"/tournaments/matches/{match_id}/result", json=payload)
        if isinstance(data, dict) and isinstance(data.get("match"), dict):
            data = data["match"]
        if isinstance(data, dict) and data.get("_id"):
            return parse_match(data)
        return None

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Authenticate and return the token and user payload."""
        data = self.request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            authenticated=False,
        )
        if not isinstance(data, dict) or not data.get("token"):
            raise ApiError(500, UNEXPECTED_MESSAGE, data)
        user = data.get("user") or {}
        if not isinstance(user, dict):
            raise SchemaError("login: 'user' must be an object", data)
        return {"token": str(data["token"]), "user": user}

    def check_health(self) -> bool:
        """Return True when the backend health endpoint answers 200."""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"API health check failed: {e}")
            return False
        return response.status_code == 200  # noqa: PLR2004
