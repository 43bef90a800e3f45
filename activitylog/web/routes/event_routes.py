"""
Event API routes: lifecycle, listing and aggregates.
"""
from typing import Any, Dict
from flask import Flask, jsonify, request
from ...config import settings
from ...exceptions import ValidationError
from ...presentation.forms import build_event_fields
from ...services import AnalyticsService, EventService
from .params import parse_date, parse_int, parse_optional_timestamp, parse_timestamp


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        if request.get_data():
            raise ValidationError("Request body is not valid JSON")
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def register_routes(app: Flask) -> None:
    """Register event API routes with Flask app."""

    event_service = EventService()
    analytics_service = AnalyticsService()

    @app.route("/api/events/current")
    def api_current_event() -> Any:  # pyright: ignore[reportUnusedFunction]
        event = event_service.get_current_event()
        return jsonify(event.to_dict() if event else None)

    @app.route("/api/events", methods=["GET"])
    def api_events() -> Any:  # pyright: ignore[reportUnusedFunction]
        limit = parse_int(request.args.get("limit"), "limit", settings.page_size, minimum=1)
        offset = parse_int(request.args.get("offset"), "offset", 0)
        return jsonify([e.to_dict() for e in event_service.get_all_events(limit, offset)])

    @app.route("/api/events", methods=["POST"])
    def api_create_event() -> Any:  # pyright: ignore[reportUnusedFunction]
        payload = _json_body()
        if "mode" in payload:
            # Submitted straight from the new-event form
            fields = build_event_fields(
                payload.get("name"),
                payload.get("start"),
                payload["mode"],
                payload.get("end"),
                payload.get("duration", 0),
            )
        else:
            fields = {
                "name": payload.get("name"),
                "start_time": parse_optional_timestamp(payload.get("start_time"), "start_time"),
                "end_time": parse_optional_timestamp(payload.get("end_time"), "end_time"),
            }
        event = event_service.create_event(**fields)
        return jsonify(event.to_dict()), 201

    @app.route("/api/events/range")
    def api_events_range() -> Any:  # pyright: ignore[reportUnusedFunction]
        start = parse_timestamp(request.args.get("start"), "start")
        end = parse_timestamp(request.args.get("end"), "end")
        return jsonify([e.to_dict() for e in event_service.get_events_by_date_range(start, end)])

    @app.route("/api/events/frequent")
    def api_frequent_names() -> Any:  # pyright: ignore[reportUnusedFunction]
        limit = parse_int(request.args.get("limit"), "limit", settings.frequent_names_limit, minimum=1)
        return jsonify(event_service.get_frequent_event_names(limit))

    @app.route("/api/events/<int:event_id>/end", methods=["POST"])
    def api_end_event(event_id: int) -> Any:  # pyright: ignore[reportUnusedFunction]
        payload = _json_body()
        end_time = parse_optional_timestamp(payload.get("end_time"), "end_time")
        return jsonify(event_service.end_event(event_id, end_time).to_dict())

    @app.route("/api/events/<int:event_id>", methods=["PATCH"])
    def api_update_event(event_id: int) -> Any:  # pyright: ignore[reportUnusedFunction]
        payload = _json_body()
        fields: Dict[str, Any] = {}
        for key, value in payload.items():
            if key in ("start_time", "end_time"):
                fields[key] = parse_optional_timestamp(value, key)
            else:
                fields[key] = value
        return jsonify(event_service.update_event(event_id, **fields).to_dict())

    @app.route("/api/events/<int:event_id>", methods=["DELETE"])
    def api_delete_event(event_id: int) -> Any:  # pyright: ignore[reportUnusedFunction]
        event_service.delete_event(event_id)
        return "", 204

    @app.route("/api/aggregations/day")
    def api_day_aggregation() -> Any:  # pyright: ignore[reportUnusedFunction]
        day = parse_date(request.args.get("date"))
        return jsonify(analytics_service.get_day_aggregation(day))

    @app.route("/api/aggregations/week")
    def api_week_aggregation() -> Any:  # pyright: ignore[reportUnusedFunction]
        day = parse_date(request.args.get("date"))
        return jsonify(analytics_service.get_week_aggregation(day))
