"""Local single-elimination bracket skeletons."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import MATCH_PENDING, Match, Player

PLACEHOLDER_FIRST_ROUND = 4
PLACEHOLDER_ROUNDS = 3


def rounds_for(player_count: int) -> int:
    """Number of rounds needed to seat ``player_count`` players."""
    if player_count <= 1:
        return 1
    return math.ceil(math.log2(player_count))


def first_round_size(player_count: int) -> int:
    """Number of first-round matches for ``player_count`` players."""
    return 2 ** (rounds_for(player_count) - 1)


def _match_id(round_number: int, match_number: int) -> str:
    return f"round{round_number}-match{match_number}"


def _next_match_id(round_number: int, match_number: int, rounds: int) -> str | None:
    if round_number >= rounds:
        return None
    return _match_id(round_number + 1, (match_number + 1) // 2)


class BracketGenerator:
    """Builds display-only brackets before the backend has persisted one."""

    @staticmethod
    def generate(players: Sequence[Player]) -> list[Match]:
        """Pair players in registration order into a single-elimination skeleton.

        Players at positions 2i and 2i+1 meet in first-round match i. A match
        left with one player is a bye and is not resolved here; later rounds
        are created empty.
        """
        player_count = len(players)
        if player_count == 0:
            return BracketGenerator.generate_placeholder()

        rounds = rounds_for(player_count)
        matches: list[Match] = []

        for i in range(first_round_size(player_count)):
            seated: list[Player | None] = [
                dict(players[index])  # type: ignore[misc]
                for index in (2 * i, 2 * i + 1)
                if index < player_count
            ]
            matches.append({
                "_id": _match_id(1, i + 1),
                "round": 1,
                "matchNumber": i + 1,
                "players": seated,
                "status": MATCH_PENDING,
                "nextMatchId": _next_match_id(1, i + 1, rounds),
            })

        for round_number in range(2, rounds + 1):
            for i in range(2 ** (rounds - round_number)):
                matches.append({
                    "_id": _match_id(round_number, i + 1),
                    "round": round_number,
                    "matchNumber": i + 1,
                    "players": [],
                    "status": MATCH_PENDING,
                    "nextMatchId": _next_match_id(round_number, i + 1, rounds),
                })

        return matches

    @staticmethod
    def generate_placeholder() -> list[Match]:
        """Return the fixed eight-slot scaffold shown when nobody has registered."""
        matches: list[Match] = []
        for i in range(PLACEHOLDER_FIRST_ROUND):
            matches.append({
                "_id": f"empty-1-{i + 1}",
                "round": 1,
                "matchNumber": i + 1,
                "players": [
                    {"_id": f"player{2 * i + 1}", "username": f"Player {2 * i + 1}"},
                    {"_id": f"player{2 * i + 2}", "username": f"Player {2 * i + 2}"},
                ],
                "status": MATCH_PENDING,
                "nextMatchId": f"empty-2-{i // 2 + 1}",
            })
        for i in range(PLACEHOLDER_FIRST_ROUND // 2):
            matches.append({
                "_id": f"empty-2-{i + 1}",
                "round": 2,
                "matchNumber": i + 1,
                "players": [],
                "status": MATCH_PENDING,
                "nextMatchId": "empty-3-1",
            })
        matches.append({
            "_id": "empty-3-1",
            "round": PLACEHOLDER_ROUNDS,
            "matchNumber": 1,
            "players": [],
            "status": MATCH_PENDING,
            "nextMatchId": None,
        })
        return matches
