from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import read_json_body
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/class-count", methods=["GET"], endpoint="class_count")
    def class_count():
        return jsonify({"totalClassesHeld": container.class_counter_service.read()})

    @app.route("/api/class-count", methods=["POST"], endpoint="increment_class_count")
    def increment_class_count():
        payload = read_json_body(required=False)
        amount = 1
        if payload is not None:
            if not isinstance(payload, dict):
                raise ValidationError("Request body must be a JSON object.")
            amount = payload.get("increment", 1)

        total = container.class_counter_service.increment_by(amount)
        return jsonify({"totalClassesHeld": total})
