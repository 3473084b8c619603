from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import BadRequest

from ..auth.request_context import acting_user, require_acting_user
from ..container import Container


@dataclass(frozen=True)
class ClockRequest:
    location_id: int
    lat: float
    lng: float
    note: Optional[str] = None


def _as_float(data: dict, key: str, *, low: float, high: float) -> float:
    value: Any = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BadRequest(f"'{key}' must be a number")
    value = float(value)
    if math.isnan(value) or not low <= value <= high:
        raise BadRequest(f"'{key}' must be between {low:g} and {high:g}")
    return value


def parse_clock_request(data: Any) -> ClockRequest:
    if not isinstance(data, dict):
        raise BadRequest("Expected a JSON object")

    location_id = data.get("locationId")
    if isinstance(location_id, bool) or not isinstance(location_id, int):
        raise BadRequest("'locationId' must be an integer")

    note = data.get("note")
    if note is not None and not isinstance(note, str):
        raise BadRequest("'note' must be a string")

    return ClockRequest(
        location_id=location_id,
        lat=_as_float(data, "lat", low=-90.0, high=90.0),
        lng=_as_float(data, "lng", low=-180.0, high=180.0),
        note=note,
    )


def register(app: Flask, container: Container) -> None:
    ledger = container.clock_service

    @app.route("/me/events", methods=["GET"], endpoint="my_events")
    def my_events():
        events = ledger.list_for_user(acting_user(container))
        return jsonify([e.to_dict() for e in events])

    @app.route("/events/clocked-in", methods=["GET"], endpoint="clocked_in")
    def clocked_in():
        events = ledger.list_currently_clocked_in(acting_user(container))
        return jsonify([e.to_dict() for e in events])

    @app.route("/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in():
        user = require_acting_user(container)
        body = parse_clock_request(request.get_json(silent=True))
        event = ledger.clock_in(user, body.location_id, body.lat, body.lng, body.note)
        return jsonify(event.to_dict()), 201

    @app.route("/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out():
        user = require_acting_user(container)
        body = parse_clock_request(request.get_json(silent=True))
        event = ledger.clock_out(user, body.location_id, body.lat, body.lng, body.note)
        return jsonify(event.to_dict()), 201
