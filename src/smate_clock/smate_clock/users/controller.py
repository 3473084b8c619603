from __future__ import annotations

from flask import Flask, jsonify

from ..auth.request_context import current_claims, require_acting_user
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/first-login", methods=["POST"], endpoint="first_login")
    def first_login():
        user = container.identity_resolver.first_login(current_claims(container))
        return jsonify(user.to_dict())

    @app.route("/me", methods=["GET"], endpoint="me")
    def me():
        return jsonify(require_acting_user(container).to_dict())
