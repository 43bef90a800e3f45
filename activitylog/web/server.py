"""
Flask application factory for the activity log API.
"""
import logging
import socket
import sqlite3
from typing import Any, Tuple

from flask import Flask, jsonify

from ..exceptions import ActivityLogError, EventNotFoundError, ValidationError

logger = logging.getLogger(__name__)


def find_free_port(preferred: int = 5050, host: str = "127.0.0.1") -> int:
    """Try preferred port, fall back if unavailable."""
    for port in (preferred, 8080, 5000):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((host, port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No free port found ({preferred}/8080/5000 busy)")


def create_app() -> Flask:
    """Create the Flask app with all API routes registered."""
    app = Flask(__name__)

    from .routes import event_routes, view_routes
    event_routes.register_routes(app)
    view_routes.register_routes(app)

    @app.errorhandler(ValidationError)
    def handle_validation(e: ValidationError) -> Tuple[Any, int]:  # pyright: ignore[reportUnusedFunction]
        return jsonify(e.to_dict()), 400

    @app.errorhandler(EventNotFoundError)
    def handle_not_found(e: EventNotFoundError) -> Tuple[Any, int]:  # pyright: ignore[reportUnusedFunction]
        return jsonify(e.to_dict()), 404

    @app.errorhandler(ActivityLogError)
    def handle_app_error(e: ActivityLogError) -> Tuple[Any, int]:  # pyright: ignore[reportUnusedFunction]
        return jsonify(e.to_dict()), 400

    @app.errorhandler(sqlite3.Error)
    def handle_store_error(e: sqlite3.Error) -> Tuple[Any, int]:  # pyright: ignore[reportUnusedFunction]
        logger.exception("Store error")
        return jsonify({"error": "STORE_ERROR", "message": str(e)}), 500

    @app.route("/health")
    def health() -> Any:  # pyright: ignore[reportUnusedFunction]
        return jsonify({"status": "ok"})

    return app
