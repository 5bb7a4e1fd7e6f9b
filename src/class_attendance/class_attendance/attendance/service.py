from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.validators import optional_text, require_iso_date, require_non_empty
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateAttendanceError, ValidationError
from .filters import RecordQuery
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("date", "studentName", "status")


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, enforce_one_per_day: bool = False):
        self._attendance = attendance
        self._enforce_one_per_day = bool(enforce_one_per_day)

    def record(self, payload: Optional[Mapping[str, Any]], *, now: Optional[datetime] = None) -> int:
        """Validate and store one attendance entry; returns the new record id.

        ``recordedAt`` is always stamped here, never taken from the caller.
        """

        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object.")

        missing = [f for f in REQUIRED_FIELDS if not isinstance(payload.get(f), str) or not payload[f].strip()]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}.")

        attendance_date = require_iso_date(payload["date"], "date")
        student_name = require_non_empty(payload["studentName"], "studentName")
        try:
            status = AttendanceStatus(payload["status"].strip())
        except ValueError:
            allowed = ", ".join(s.value for s in AttendanceStatus)
            raise ValidationError(f"Invalid status: expected one of {allowed}.") from None
        subject = optional_text(payload.get("subject"), "subject")
        section = optional_text(payload.get("section"), "section")

        if self._enforce_one_per_day and self._attendance.exists_for_student_and_date(student_name, attendance_date):
            raise DuplicateAttendanceError(
                f"{student_name} already has attendance recorded for {attendance_date.isoformat()}."
            )

        record_id = self._attendance.create(
            attendance_date=attendance_date,
            student_name=student_name,
            status=status,
            recorded_at=now or now_local(),
            subject=subject,
            section=section,
        )
        logger.info("Attendance recorded with id %s", record_id)
        return record_id

    def list_records(self, query: RecordQuery) -> list[dict]:
        return [self.to_payload(r) for r in self._attendance.find(query)]

    @staticmethod
    def to_payload(r: AttendanceRecord) -> dict:
        return {
            "id": r.record_id,
            "date": r.attendance_date.strftime("%Y-%m-%d"),
            "studentName": r.student_name,
            "status": r.status.value,
            "subject": r.subject,
            "section": r.section,
            "recordedAt": r.recorded_at.isoformat(),
        }
