"""Helpers for laying out bracket rounds in templates."""

from __future__ import annotations

from collections.abc import Sequence

from .models import Match


def group_by_round(matches: Sequence[Match]) -> list[tuple[int, list[Match]]]:
    """Group matches by round, each round ordered by match number."""
    rounds: dict[int, list[Match]] = {}
    for match in matches:
        rounds.setdefault(match["round"], []).append(match)
    return [
        (number, sorted(rounds[number], key=lambda m: m.get("matchNumber", 0)))
        for number in sorted(rounds)
    ]


def max_round(matches: Sequence[Match]) -> int:
    """Return the highest round number, or 0 for an empty bracket."""
    return max((m["round"] for m in matches), default=0)


def round_label(round_number: int, last_round: int) -> str:
    """Column heading for a round."""
    if round_number == last_round:
        return "Final"
    if round_number == last_round - 1:
        return "Semi-finals"
    return f"Round {round_number}"


def match_label(match: Match, last_round: int) -> str:
    """Card heading for a match."""
    round_number = match["round"]
    number = match.get("matchNumber")
    if round_number == last_round and number == 1:
        return "Final"
    if round_number == last_round and number == 2:  # noqa: PLR2004
        return "Final 2"
    return f"Match {round_number}-{number}"
