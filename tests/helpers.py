"""Shared fixtures for the test suite."""

from __future__ import annotations

import json
import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from afriksoccer import create_app

MOCK_ADMIN_ID = "admin1"
MOCK_TOKEN = "token-123"  # nosec
TOURNAMENT_ID = "t1"


def make_player(index: int) -> dict[str, Any]:
    """A registered player numbered from 1."""
    return {
        "_id": f"p{index}",
        "username": f"gamer{index}",
        "email": f"gamer{index}@example.com",
        "joinedAt": f"2024-05-{index:02d}T10:00:00.000Z",
    }


def make_players(count: int) -> list[dict[str, Any]]:
    """``count`` players in registration order."""
    return [make_player(i) for i in range(1, count + 1)]


def make_tournament(**overrides: Any) -> dict[str, Any]:
    """A tournament payload as the admin endpoint sends it."""
    data: dict[str, Any] = {
        "_id": TOURNAMENT_ID,
        "title": "Afrik Cup Spring",
        "description": "FC 24 knockout",
        "status": "in-progress",
        "date": "2024-06-15T18:00:00.000Z",
        "maxPlayers": 8,
        "entryFee": 1000,
        "prize": 50000,
        "firstPlaceReward": 30000,
        "secondPlaceReward": 15000,
        "thirdPlaceReward": 5000,
        "players": make_players(4),
        "matches": [],
    }
    data.update(overrides)
    return data


def make_persisted_match(match_id: str, round_number: int, number: int, **overrides: Any) -> dict[str, Any]:
    """A match as stored by the backend."""
    data: dict[str, Any] = {
        "_id": match_id,
        "round": round_number,
        "matchNumber": number,
        "players": [],
        "status": "pending",
    }
    data.update(overrides)
    return data


def mock_response(status_code: int = 200, payload: Any = None) -> MagicMock:
    """A stand-in for ``requests.Response``."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = status_code < 400  # noqa: PLR2004
    response.content = b"" if payload is None else json.dumps(payload).encode()
    response.json.return_value = payload
    return response


class AppTestCase(unittest.TestCase):
    """Base case with an app, a test client and a mocked backend client."""

    client_patch_targets = (
        "afriksoccer.tournament.routes.get_client",
        "afriksoccer.auth.routes.get_client",
    )

    def setUp(self) -> None:
        """Set up a test client and a mocked backend."""
        self.backend = MagicMock()
        self.backend.bracket_exists.return_value = False

        patchers = [patch(target, return_value=self.backend) for target in self.client_patch_targets]
        for p in patchers:
            p.start()
            self.addCleanup(p.stop)

        self.app = create_app(
            {"TESTING": True, "WTF_CSRF_ENABLED": False, "SERVER_NAME": "localhost"}
        )
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

    def tearDown(self) -> None:
        """Tear down the test client."""
        self.app_context.pop()

    def login(self, is_admin: bool = True) -> None:
        """Put a logged-in user in the session."""
        with self.client.session_transaction() as sess:
            sess["user_id"] = MOCK_ADMIN_ID
            sess["username"] = "boss"
            sess["token"] = MOCK_TOKEN
            sess["is_admin"] = is_admin
