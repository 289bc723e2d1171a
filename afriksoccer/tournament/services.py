"""Service layer for the tournament admin pages."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from afriksoccer.bracket import (
    BracketGenerator,
    group_by_round,
    max_round,
    set_match_winner,
)
from afriksoccer.errors import BracketError

from .utils import default_registration_deadline, fill_rate

if TYPE_CHECKING:
    import datetime

    from afriksoccer.api import BackendClient
    from afriksoccer.bracket import Match

SOURCE_PERSISTED = "persisted"
SOURCE_GENERATED = "generated"

WinnerPick = Sequence[str]


def replay_winners(
    matches: list[Match], picks: Sequence[WinnerPick]
) -> list[Match]:
    """Apply stored winner picks in order, skipping any that no longer fit."""
    for match_id, winner_id in picks:
        try:
            matches = set_match_winner(matches, match_id, winner_id)
        except BracketError as e:
            logging.warning(f"Dropped stale winner pick {match_id}/{winner_id}: {e.message}")
    return matches


class TournamentService:
    """Builds the admin view of a tournament and relays operator actions."""

    @staticmethod
    def load_details(
        client: BackendClient,
        tournament_id: str,
        picks: Sequence[WinnerPick] | None = None,
    ) -> dict[str, Any]:
        """Fetch a tournament and assemble its bracket view-model.

        Persisted matches win over the locally generated skeleton. Winner
        picks made in this session are replayed on top of either.
        """
        tournament = client.get_tournament(tournament_id)

        if tournament.get("date") and not tournament.get("registrationDeadline"):
            deadline = default_registration_deadline(tournament["date"])
            if deadline:
                tournament["registrationDeadline"] = deadline

        players = tournament.get("players", [])
        persisted = tournament.get("matches") or []
        if persisted:
            matches = list(persisted)
            source = SOURCE_PERSISTED
            bracket_exists = True
        else:
            matches = BracketGenerator.generate(players)
            source = SOURCE_GENERATED
            bracket_exists = client.bracket_exists(tournament_id)

        if picks:
            matches = replay_winners(matches, picks)

        return {
            "tournament": tournament,
            "matches": matches,
            "source": source,
            "bracket_exists": bracket_exists,
            "rounds": group_by_round(matches),
            "max_round": max_round(matches),
            "fill_rate": fill_rate(len(players), tournament.get("maxPlayers")),
        }

    @staticmethod
    def apply_winner(
        matches: Sequence[Match],
        picks: Sequence[WinnerPick],
        match_id: str,
        winner_id: str,
    ) -> list[list[str]]:
        """Validate a new winner pick against the current view and record it.

        Picks stay in the order they were first made, so a feeder match is
        always replayed before the matches it feeds. Repeating a pick leaves
        the list as it was; a changed winner replaces the earlier pick in
        place. Raises a :class:`BracketError` when the pick cannot be applied.
        """
        updated = [list(p) for p in picks]
        index = next((i for i, p in enumerate(updated) if p[0] == match_id), None)
        if index is not None and updated[index][1] == winner_id:
            return updated

        set_match_winner(matches, match_id, winner_id)
        if index is None:
            updated.append([match_id, winner_id])
        else:
            updated[index] = [match_id, winner_id]
        return updated

    @staticmethod
    def generate_bracket(client: BackendClient, tournament_id: str) -> str:
        """Ask the backend to generate the authoritative bracket."""
        message = client.generate_bracket(tournament_id)
        logging.info(f"Bracket generated for tournament {tournament_id}")
        return message

    @staticmethod
    def build_result_payload(
        match_date: datetime.date,
        match_time: str | None,
        player1_score: int | None,
        player2_score: int | None,
        status: str,
    ) -> dict[str, Any]:
        """Shape a match result the way the backend expects it."""
        payload: dict[str, Any] = {
            "date": match_date.isoformat(),
            "time": match_time or "",
            "status": status,
        }
        if player1_score is not None:
            payload["player1Score"] = player1_score
        if player2_score is not None:
            payload["player2Score"] = player2_score
        return payload

    @staticmethod
    def submit_match_result(
        client: BackendClient, match_id: str, payload: dict[str, Any]
    ) -> Match | None:
        """Write a match result to the backend."""
        return client.submit_match_result(match_id, payload)
