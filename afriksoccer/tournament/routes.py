"""Routes for the tournament admin blueprint."""

from __future__ import annotations

from typing import Any

from flask import (
    current_app,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from afriksoccer.api import ApiError, get_client
from afriksoccer.auth.decorators import login_required
from afriksoccer.bracket import find_match, match_label, round_label
from afriksoccer.constants import (
    SESSION_PROJECTION_PREFIX,
    STATUS_LABELS,
    TOURNAMENT_IN_PROGRESS,
)
from afriksoccer.errors import BracketError, NotFoundError

from . import bp
from .forms import MatchResultForm, WinnerForm
from .services import TournamentService
from .utils import format_date, parse_date


def _projection_key(tournament_id: str) -> str:
    return f"{SESSION_PROJECTION_PREFIX}{tournament_id}"


def _get_picks(tournament_id: str) -> list[list[str]]:
    return session.get(_projection_key(tournament_id), [])


def _clear_picks(tournament_id: str) -> None:
    session.pop(_projection_key(tournament_id), None)


def _load(tournament_id: str) -> dict[str, Any]:
    return TournamentService.load_details(
        get_client(), tournament_id, _get_picks(tournament_id)
    )


@bp.app_template_filter("display_date")
def display_date(value: str | None) -> str:
    """Template filter for backend dates."""
    return format_date(value)


@bp.route("/", methods=["GET"])
@login_required(admin_required=True)
def list_tournaments() -> Any:
    """List all tournaments."""
    try:
        tournaments = get_client().list_tournaments()
    except ApiError as e:
        current_app.logger.error(f"Error fetching tournaments: {e.message}")
        flash(e.message, "danger")
        tournaments = []
    return render_template(
        "tournament/list.html", tournaments=tournaments, status_labels=STATUS_LABELS
    )


@bp.route("/<string:tournament_id>", methods=["GET"])
@login_required(admin_required=True)
def view_tournament(tournament_id: str) -> Any:
    """View a tournament with its players and bracket."""
    try:
        details = _load(tournament_id)
    except ApiError as e:
        current_app.logger.error(f"Error fetching tournament {tournament_id}: {e.message}")
        flash("Unable to load the tournament details.", "danger")
        if e.status == 404:  # noqa: PLR2004
            raise NotFoundError(e.message) from e
        raise

    tournament = details["tournament"]
    can_generate = (
        tournament["status"] == TOURNAMENT_IN_PROGRESS and not details["bracket_exists"]
    )
    return render_template(
        "tournament/view.html",
        **details,
        winner_form=WinnerForm(),
        can_generate=can_generate,
        status_labels=STATUS_LABELS,
        round_label=round_label,
        match_label=match_label,
        active_tab=request.args.get("tab", "overview"),
    )


@bp.route("/<string:tournament_id>/bracket.json", methods=["GET"])
@login_required(admin_required=True)
def bracket_json(tournament_id: str) -> Any:
    """Return the bracket currently shown to the operator."""
    details = _load(tournament_id)
    return jsonify({
        "source": details["source"],
        "bracketExists": details["bracket_exists"],
        "matches": details["matches"],
    })


@bp.route("/<string:tournament_id>/bracket/generate", methods=["POST"])
@login_required(admin_required=True)
def generate_bracket(tournament_id: str) -> Any:
    """Ask the backend to generate the bracket."""
    try:
        message = TournamentService.generate_bracket(get_client(), tournament_id)
        _clear_picks(tournament_id)
        flash(message, "success")
    except ApiError as e:
        current_app.logger.error(f"Bracket generation failed for {tournament_id}: {e.message}")
        flash(e.message, "danger")
    return redirect(url_for(".view_tournament", tournament_id=tournament_id, tab="bracket"))


@bp.route("/<string:tournament_id>/matches/<string:match_id>/winner", methods=["POST"])
@login_required(admin_required=True)
def set_winner(tournament_id: str, match_id: str) -> Any:
    """Designate a match winner in the local bracket view."""
    form = WinnerForm()
    if not form.validate_on_submit():
        flash("Select a winner.", "danger")
        return redirect(url_for(".view_tournament", tournament_id=tournament_id, tab="bracket"))

    try:
        details = _load(tournament_id)
        picks = TournamentService.apply_winner(
            details["matches"], _get_picks(tournament_id), match_id, form.player_id.data
        )
    except BracketError as e:
        current_app.logger.warning(f"Winner rejected for match {match_id}: {e.message}")
        flash(e.message, "danger")
    except ApiError as e:
        flash(e.message, "danger")
    else:
        session[_projection_key(tournament_id)] = picks
        match = find_match(details["matches"], match_id) or {}
        winner = next(
            (p for p in match.get("players", []) if p and p.get("_id") == form.player_id.data),
            {},
        )
        flash(
            f"{winner.get('username', form.player_id.data)} was designated winner of "
            f"match {match.get('matchNumber') or match_id}.",
            "success",
        )
    return redirect(url_for(".view_tournament", tournament_id=tournament_id, tab="bracket"))


@bp.route("/<string:tournament_id>/matches/<string:match_id>/edit", methods=["GET", "POST"])
@login_required(admin_required=True)
def edit_match(tournament_id: str, match_id: str) -> Any:
    """Record the schedule and score of a match."""
    details = _load(tournament_id)
    match = find_match(details["matches"], match_id)
    if match is None:
        flash("No match selected.", "danger")
        return redirect(url_for(".view_tournament", tournament_id=tournament_id, tab="bracket"))

    form = MatchResultForm()
    if form.validate_on_submit():
        payload = TournamentService.build_result_payload(
            form.match_date.data,
            form.match_time.data,
            form.player1_score.data,
            form.player2_score.data,
            match["status"],
        )
        try:
            TournamentService.submit_match_result(get_client(), match_id, payload)
        except ApiError as e:
            current_app.logger.error(f"Saving match {match_id} failed: {e.message}")
            flash(e.message, "danger")
        else:
            _clear_picks(tournament_id)
            flash("The match details were saved.", "success")
            return redirect(
                url_for(".view_tournament", tournament_id=tournament_id, tab="bracket")
            )
    elif request.method == "GET":
        form.match_date.data = parse_date(match.get("date"))
        form.match_time.data = match.get("time", "")
        form.player1_score.data = match.get("player1Score")
        form.player2_score.data = match.get("player2Score")

    return render_template(
        "tournament/edit_match.html",
        form=form,
        match=match,
        tournament=details["tournament"],
        match_label=match_label(match, details["max_round"]),
    )
