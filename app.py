"""Main entry point for the application."""

from afriksoccer import create_app
from afriksoccer.api import BackendClient

app = create_app()


@app.route("/health")
def health_check():
    """Report whether the app and the tournament backend are up."""
    client = BackendClient(
        base_url=app.config["API_URL"], timeout=app.config["API_TIMEOUT"]
    )
    if not client.check_health():
        app.logger.warning("Health check: backend unavailable")
        return "Backend unavailable", 503
    return "OK", 200


if __name__ == "__main__":
    app.run(debug=True, host="0.0.0.0", port=8080)  # nosec
