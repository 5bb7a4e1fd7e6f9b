from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.filters import parse_stats_query
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/statistics", methods=["GET"], endpoint="statistics")
    def statistics():
        query = parse_stats_query(request.args, epoch=container.stats_epoch)
        report = container.statistics_service.build_report(query)
        return jsonify(report.to_payload())
