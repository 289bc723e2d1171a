"""Initialize the Flask app and its extensions."""

import os

from flask import Flask, g, session
from werkzeug.middleware.proxy_fix import ProxyFix

from .constants import CURRENCY, ROLE_ADMIN, SESSION_USER_ID, SESSION_USERNAME
from .extensions import csrf


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(
        __name__,
        instance_relative_config=True,
        static_folder="static",
        static_url_path="/static",
    )

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        API_URL=(os.environ.get("API_URL") or "http://localhost:5000/api").strip(),
        API_TIMEOUT=float(os.environ.get("API_TIMEOUT") or 10),
        ADMIN_ROLE=os.environ.get("ADMIN_ROLE") or ROLE_ADMIN,
        APP_VERSION=os.environ.get("APP_VERSION") or "dev",
    )

    if test_config:
        app.config.update(test_config)

    if not app.config["API_URL"]:
        app.logger.warning("API_URL is empty, using default: http://localhost:5000/api")
        app.config["API_URL"] = "http://localhost:5000/api"

    # Initialize extensions
    csrf.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import tournament as tournament_bp

    app.register_blueprint(tournament_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    app.add_url_rule("/", endpoint="auth.login", methods=["GET", "POST"])

    @app.before_request
    def load_logged_in_user():
        """Expose the session user on g for templates and views."""
        user_id = session.get(SESSION_USER_ID)
        g.user = None
        if user_id is not None:
            g.user = {"uid": user_id, "username": session.get(SESSION_USERNAME)}

    @app.context_processor
    def inject_globals():
        """Injects the application version and currency into the template context."""
        return dict(app_version=app.config["APP_VERSION"], currency=CURRENCY)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
