"""Utility functions for tournament pages."""

from __future__ import annotations

import datetime


def parse_date(value: str | None) -> datetime.date | None:
    """Parse an ISO date or datetime string from the backend."""
    if not value:
        return None
    try:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return datetime.date.fromisoformat(value[:10])
    except ValueError:
        return None


def default_registration_deadline(tournament_date: str | None) -> str | None:
    """Registration closes the day before the tournament, as YYYY-MM-DD."""
    day = parse_date(tournament_date)
    if day is None:
        return None
    return (day - datetime.timedelta(days=1)).isoformat()


def format_date(value: str | None) -> str:
    """Format a backend date for display, falling back to the raw value."""
    day = parse_date(value)
    if day is None:
        return value or "--"
    return day.strftime("%d %B %Y")


def fill_rate(player_count: int, max_players: int | None) -> int:
    """Percentage of seats taken, halves rounded up."""
    if not max_players:
        return 0
    return int(player_count * 100 / max_players + 0.5)
