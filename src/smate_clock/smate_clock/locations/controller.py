from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/locations", methods=["GET"], endpoint="locations")
    def locations():
        return jsonify([loc.to_dict() for loc in container.location_registry.list_all()])
