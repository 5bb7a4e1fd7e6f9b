from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.http import read_json_body
from ..container import Container
from .filters import parse_record_query

CSV_FIELDS = ["id", "date", "studentName", "status", "subject", "section", "recordedAt"]


def register(app: Flask, container: Container) -> None:
    def _write_records_csv(*, rows: list[dict], filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        query = parse_record_query(request.args)
        return jsonify(container.attendance_service.list_records(query))

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    def record_attendance():
        record_id = container.attendance_service.record(read_json_body())
        return jsonify({"message": "Attendance recorded.", "id": record_id}), 201

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="export_attendance_csv")
    def export_attendance_csv():
        query = parse_record_query(request.args)
        rows = container.attendance_service.list_records(query)
        safe_label = "".join(ch if ch.isalnum() or ch in "-_" else "_" for ch in query.label())
        return _write_records_csv(rows=rows, filename=f"attendance_{safe_label}.csv")
