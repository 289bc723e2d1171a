"""Optimistic winner propagation for brackets shown in the admin UI."""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence

from afriksoccer.errors import (
    MatchNotFoundError,
    MatchNotReadyError,
    SuccessorDecidedError,
    SuccessorFullError,
    WinnerNotParticipantError,
)

from .models import MATCH_BYE, MATCH_COMPLETED, Match, Player, player_id

MATCH_SIZE = 2


def find_match(matches: Sequence[Match], match_id: str) -> Match | None:
    """Return the match with ``match_id``, if present."""
    return next((m for m in matches if m.get("_id") == match_id), None)


def _place_in_successor(
    successor: Match, winner: Player, previous_id: str | None = None
) -> None:
    slots = successor.setdefault("players", [])
    winner_id = winner["_id"]
    if any(player_id(p) == winner_id for p in slots):
        return

    # A corrected result takes over the slot of the player it replaces.
    if previous_id:
        for i, p in enumerate(slots):
            if player_id(p) == previous_id:
                slots[i] = winner
                return

    empty_index = next(
        (i for i, p in enumerate(slots) if player_id(p) is None), None
    )
    if empty_index is not None:
        slots[empty_index] = winner
    elif len(slots) < MATCH_SIZE:
        slots.append(winner)
    else:
        raise SuccessorFullError()


def set_match_winner(
    matches: Sequence[Match], match_id: str, winner_id: str
) -> list[Match]:
    """Mark ``winner_id`` as the winner of a match and advance them.

    Returns a new list; ``matches`` is left untouched. The winner takes the
    first open slot of the match named by ``nextMatchId``. Changing the
    winner of a match whose successor is already completed raises
    :class:`SuccessorDecidedError`. Nothing is sent to the backend.
    """
    updated = copy.deepcopy(list(matches))
    match = find_match(updated, match_id)
    if match is None:
        raise MatchNotFoundError()

    players = [p for p in match.get("players", []) if player_id(p)]
    winner = next((p for p in players if player_id(p) == winner_id), None)
    if winner is None:
        logging.warning(f"Rejected winner {winner_id} for match {match_id}")
        raise WinnerNotParticipantError()

    if len(players) < MATCH_SIZE and match.get("status") != MATCH_BYE:
        raise MatchNotReadyError()

    previous_id = player_id(match.get("winner"))
    next_id = match.get("nextMatchId")
    successor = find_match(updated, next_id) if next_id else None
    if successor is not None:
        if (
            previous_id not in (None, winner_id)
            and successor.get("status") == MATCH_COMPLETED
        ):
            raise SuccessorDecidedError()
        _place_in_successor(successor, copy.deepcopy(winner), previous_id)

    match["winner"] = winner
    match["status"] = MATCH_COMPLETED
    return updated
