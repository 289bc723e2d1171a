"""Tournament admin blueprint."""

from flask import Blueprint

bp = Blueprint("tournament", __name__, url_prefix="/admin/tournaments")

from . import routes  # noqa: E402, F401
from .services import TournamentService  # noqa: E402

__all__ = ["TournamentService", "routes"]
