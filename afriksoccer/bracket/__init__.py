"""Single-elimination bracket helpers."""

from .generator import BracketGenerator, first_round_size, rounds_for
from .layout import group_by_round, match_label, max_round, round_label
from .models import Match, Player, Tournament
from .progression import find_match, set_match_winner

__all__ = [
    "BracketGenerator",
    "Match",
    "Player",
    "Tournament",
    "find_match",
    "first_round_size",
    "group_by_round",
    "match_label",
    "max_round",
    "round_label",
    "rounds_for",
    "set_match_winner",
]
