"""Validation of backend payloads at the network boundary."""

from __future__ import annotations

from typing import Any, cast

from afriksoccer.bracket.models import (
    MATCH_STATUSES,
    TOURNAMENT_STATUSES,
    Match,
    Player,
    Tournament,
)

from .errors import SchemaError

_PLAYER_OPTIONAL = ("email", "avatar", "joinedAt")
_MATCH_OPTIONAL = ("date", "time", "matchCode")
_TOURNAMENT_OPTIONAL = (
    "description",
    "date",
    "registrationStart",
    "registrationDeadline",
    "createdBy",
)
_TOURNAMENT_AMOUNTS = (
    "prize",
    "entryFee",
    "firstPlaceReward",
    "secondPlaceReward",
    "thirdPlaceReward",
)


def _require(payload: Any, key: str, kind: type | tuple[type, ...], where: str) -> Any:
    if not isinstance(payload, dict):
        raise SchemaError(f"{where}: expected an object", payload)
    if key not in payload:
        raise SchemaError(f"{where}: missing '{key}'", payload)
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, kind):
        raise SchemaError(f"{where}: '{key}' has the wrong type", payload)
    return value


def _optional_score(payload: dict[str, Any], key: str) -> int | None:
    value = payload.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise SchemaError(f"match: '{key}' must be an integer", payload)
    return value


def parse_player(payload: Any) -> Player:
    """Validate a player object."""
    player: dict[str, Any] = {
        "_id": str(_require(payload, "_id", (str, int), "player")),
        "username": _require(payload, "username", str, "player"),
    }
    for key in _PLAYER_OPTIONAL:
        if payload.get(key) is not None:
            player[key] = payload[key]
    return cast(Player, player)


def _roster_entry(payload: Any) -> Player:
    if isinstance(payload, str):
        return {"_id": payload, "username": ""}
    return parse_player(payload)


def parse_slot(payload: Any) -> Player | None:
    """Validate a match slot, which may be empty."""
    if payload is None or (isinstance(payload, dict) and not payload.get("_id")):
        return None
    return parse_player(payload)


def parse_match(payload: Any) -> Match:
    """Validate a match object."""
    status = _require(payload, "status", str, "match")
    if status not in MATCH_STATUSES:
        raise SchemaError(f"match: unknown status '{status}'", payload)

    players = _require(payload, "players", list, "match")
    match: dict[str, Any] = {
        "_id": str(_require(payload, "_id", (str, int), "match")),
        "round": _require(payload, "round", int, "match"),
        "matchNumber": _require(payload, "matchNumber", int, "match"),
        "players": [parse_slot(p) for p in players],
        "status": status,
        "winner": parse_slot(payload.get("winner")),
        "nextMatchId": payload.get("nextMatchId") or None,
        "player1Score": _optional_score(payload, "player1Score"),
        "player2Score": _optional_score(payload, "player2Score"),
    }
    for key in _MATCH_OPTIONAL:
        if payload.get(key) is not None:
            match[key] = payload[key]
    return cast(Match, match)


def parse_matches(payload: Any) -> list[Match]:
    """Validate a list of matches."""
    if not isinstance(payload, list):
        raise SchemaError("bracket: expected a list of matches", payload)
    return [parse_match(m) for m in payload]


def parse_tournament(payload: Any) -> Tournament:
    """Validate a tournament object from the admin endpoint."""
    status = _require(payload, "status", str, "tournament")
    if status not in TOURNAMENT_STATUSES:
        raise SchemaError(f"tournament: unknown status '{status}'", payload)

    tournament: dict[str, Any] = {
        "_id": str(_require(payload, "_id", (str, int), "tournament")),
        "title": _require(payload, "title", str, "tournament"),
        "status": status,
        "players": [_roster_entry(p) for p in payload.get("players") or []],
        # list endpoints send match ids only; those are not a bracket
        "matches": parse_matches(
            [m for m in payload.get("matches") or [] if not isinstance(m, str)]
        ),
        "hasGeneratedBracket": bool(payload.get("hasGeneratedBracket", False)),
    }

    max_players = payload.get("maxPlayers")
    if max_players is not None:
        if isinstance(max_players, bool) or not isinstance(max_players, int):
            raise SchemaError("tournament: 'maxPlayers' must be an integer", payload)
        tournament["maxPlayers"] = max_players

    for key in _TOURNAMENT_AMOUNTS:
        value = payload.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise SchemaError(f"tournament: '{key}' must be a number", payload)
        tournament[key] = value

    for key in _TOURNAMENT_OPTIONAL:
        if payload.get(key) is not None:
            tournament[key] = payload[key]
    return cast(Tournament, tournament)
