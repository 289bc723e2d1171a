"""Routes for the auth blueprint."""

from flask import current_app, flash, redirect, render_template, session, url_for

from afriksoccer.api import ApiError, get_client
from afriksoccer.constants import (
    SESSION_IS_ADMIN,
    SESSION_TOKEN,
    SESSION_USER_ID,
    SESSION_USERNAME,
)

from . import bp
from .forms import LoginForm


@bp.route("/login", methods=["GET", "POST"])
def login():
    """
    Renders the login page and exchanges credentials for a backend token.
    The token is kept in the server-side session and sent with every API call.
    """
    form = LoginForm()
    if form.validate_on_submit():
        try:
            result = get_client().login(form.email.data, form.password.data)
        except ApiError as e:
            current_app.logger.warning(f"Login failed for {form.email.data}: {e.message}")
            flash(e.message, "danger")
            return render_template("auth/login.html", form=form), 401

        user = result["user"]
        session.clear()
        session[SESSION_TOKEN] = result["token"]
        session[SESSION_USER_ID] = str(user.get("_id") or user.get("id") or "")
        session[SESSION_USERNAME] = user.get("username")
        session[SESSION_IS_ADMIN] = user.get("role") == current_app.config["ADMIN_ROLE"]
        flash("Logged in successfully.", "success")
        return redirect(url_for("tournament.list_tournaments"))

    return render_template("auth/login.html", form=form)


@bp.route("/logout")
def logout():
    """Clear the server-side session."""
    session.clear()
    flash("You have been logged out.", "success")
    return redirect(url_for("auth.login"))
