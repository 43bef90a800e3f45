"""
View-model routes: data already formatted for the dashboard panels.
"""
from typing import Any
from flask import Flask, jsonify, request
from ...config import settings
from ...presentation.views import aggregation_view, current_event_view, detailed_view
from ...services import AnalyticsService, EventService
from .params import parse_date, parse_int


def register_routes(app: Flask) -> None:
    """Register view routes with Flask app."""

    event_service = EventService()
    analytics_service = AnalyticsService()

    @app.route("/api/views/current")
    def view_current() -> Any:  # pyright: ignore[reportUnusedFunction]
        return jsonify(current_event_view(event_service.get_current_event()))

    @app.route("/api/views/day")
    def view_day() -> Any:  # pyright: ignore[reportUnusedFunction]
        day = parse_date(request.args.get("date"))
        return jsonify(aggregation_view(analytics_service.get_day_aggregation(day), "Today"))

    @app.route("/api/views/week")
    def view_week() -> Any:  # pyright: ignore[reportUnusedFunction]
        day = parse_date(request.args.get("date"))
        return jsonify(aggregation_view(analytics_service.get_week_aggregation(day), "This Week"))

    @app.route("/api/views/detailed")
    def view_detailed() -> Any:  # pyright: ignore[reportUnusedFunction]
        limit = parse_int(request.args.get("limit"), "limit", settings.page_size, minimum=1)
        offset = parse_int(request.args.get("offset"), "offset", 0)
        return jsonify(detailed_view(event_service.get_all_events(limit, offset)))
