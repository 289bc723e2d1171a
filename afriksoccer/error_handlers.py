from flask import (
    Blueprint,
    render_template,
    current_app,
    redirect,
    url_for,
    flash,
    request,
    session,
)
from flask_wtf.csrf import CSRFError

from .api.errors import ApiError, SessionExpiredError
from .errors import AppError, NotFoundError

error_handlers_bp = Blueprint("error_handlers", __name__)


@error_handlers_bp.app_errorhandler(NotFoundError)
def handle_not_found_error(error):
    """Handles not found errors."""
    current_app.logger.warning(f"Not Found Error: {error.message}")
    return render_template("404.html", error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(SessionExpiredError)
def handle_session_expired(error):
    """Logs the user out when the backend no longer accepts their token."""
    current_app.logger.warning(f"Session expired: {error.message}")
    session.clear()
    flash(error.message, "warning")
    return redirect(url_for("auth.login"))


@error_handlers_bp.app_errorhandler(ApiError)
def handle_api_error(error):
    """Handles backend failures that reach the top of a view."""
    current_app.logger.error(f"API Error ({error.status}): {error.message}")
    status = error.status if 400 <= error.status < 600 else 502
    return render_template("error.html", error=error.message), status


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Handles generic application errors."""
    current_app.logger.error(f"Application Error: {error.message}")
    return render_template("error.html", error=error.message), error.status_code


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return render_template("404.html"), 404


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return render_template("500.html"), 500


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """
    Handles CSRF errors, which usually indicate a session timeout or invalid form submission.
    """
    current_app.logger.warning(f"CSRF Error: {e.description}")
    flash("Your session may have expired. Please try your action again.", "warning")
    return redirect(request.referrer or url_for("auth.login"))
