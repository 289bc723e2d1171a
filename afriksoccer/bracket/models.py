"""Data models for tournament brackets."""

from __future__ import annotations

from typing import Any, TypedDict

MATCH_PENDING = "pending"
MATCH_IN_PROGRESS = "in_progress"
MATCH_COMPLETED = "completed"
MATCH_DISPUTE = "dispute"
MATCH_BYE = "bye"

MATCH_STATUSES = (
    MATCH_PENDING,
    MATCH_IN_PROGRESS,
    MATCH_COMPLETED,
    MATCH_DISPUTE,
    MATCH_BYE,
)

TOURNAMENT_STATUSES = ("upcoming", "open", "in-progress", "complete")


class _PlayerBase(TypedDict):
    _id: str
    username: str


class Player(_PlayerBase, total=False):
    """A registered player as returned by the backend."""

    email: str
    avatar: str
    joinedAt: str


class _MatchBase(TypedDict):
    _id: str
    round: int
    matchNumber: int
    players: list[Player | None]
    status: str


class Match(_MatchBase, total=False):
    """A bracket match, persisted or generated locally."""

    winner: Player | None
    nextMatchId: str | None
    date: str
    time: str
    player1Score: int | None
    player2Score: int | None
    matchCode: str


class _TournamentBase(TypedDict):
    _id: str
    title: str
    status: str


class Tournament(_TournamentBase, total=False):
    """A tournament document from the admin endpoint."""

    description: str
    prize: float
    entryFee: float
    date: str
    registrationStart: str
    registrationDeadline: str
    firstPlaceReward: float
    secondPlaceReward: float
    thirdPlaceReward: float
    players: list[Player]
    maxPlayers: int
    matches: list[Match]
    hasGeneratedBracket: bool
    createdBy: dict[str, Any]


def player_id(player: Player | None) -> str | None:
    """Return the id of a player slot, or None for an empty slot."""
    if not player:
        return None
    return player.get("_id") or None
