"""Flask application factory for the EOL Tracker API."""

import os

from dotenv import load_dotenv
load_dotenv()  # Load .env file if present (already gitignored)

from flask import Flask, jsonify, send_from_directory


def create_app(config=None):
    """Create and configure the Flask application."""
    from config import settings

    app = Flask(__name__)
    app.config["SECRET_KEY"] = os.environ.get("FLASK_SECRET_KEY", "dev-dashboard-key")
    app.config["INVENTORY_PATH"] = settings.INVENTORY_PATH
    app.config["DAILY_REPORTS_DIR"] = settings.DAILY_REPORTS_DIR
    app.config["LOGO_DIR"] = settings.LOGO_DIR
    app.config["LOGO_PUBLIC_BASE_URL"] = settings.LOGO_PUBLIC_BASE_URL
    app.config["SCHEDULER_ENABLED"] = settings.SCHEDULER_ENABLED
    if config:
        app.config.update(config)

    from web.routes.api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    @app.route("/health")
    def health_check():
        return jsonify({"status": "healthy", "version": "0.1.0"}), 200

    @app.route("/logos/<path:filename>")
    def logo(filename):
        return send_from_directory(app.config["LOGO_DIR"], filename)

    # Start scheduler (only in non-testing mode)
    if not app.config.get("TESTING") and app.config.get("SCHEDULER_ENABLED"):
        from web.scheduler import init_scheduler
        init_scheduler(app)

    return app
