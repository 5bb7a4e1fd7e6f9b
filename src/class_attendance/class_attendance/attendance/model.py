from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance entry for one student on one date."""

    record_id: int
    attendance_date: date
    student_name: str
    status: AttendanceStatus
    recorded_at: datetime
    subject: Optional[str] = None
    section: Optional[str] = None


@dataclass(frozen=True)
class BucketCount:
    """Read-model for grouped counts (key is a day, a week's Monday or a YYYY-MM month)."""

    key: str
    count: int


@dataclass(frozen=True)
class StudentCount:
    student_name: str
    count: int
