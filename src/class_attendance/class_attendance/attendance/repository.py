from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, Bucket
from .filters import QueryWindow, RecordQuery, StatsQuery
from .model import AttendanceRecord, BucketCount, StudentCount


class AttendanceRepository(Protocol):
    def create(
        self,
        *,
        attendance_date: date,
        student_name: str,
        status: AttendanceStatus,
        recorded_at: datetime,
        subject: Optional[str] = None,
        section: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def exists_for_student_and_date(self, student_name: str, attendance_date: date) -> bool:
        raise NotImplementedError

    def find(self, query: RecordQuery) -> Sequence[AttendanceRecord]:
        """Matching records, oldest ``recorded_at`` first."""

        raise NotImplementedError

    def count_by_bucket(
        self,
        bucket: Bucket,
        query: StatsQuery,
        window: Optional[QueryWindow],
    ) -> Sequence[BucketCount]:
        """Grouped counts sorted ascending by bucket key. ``window=None`` means all time."""

        raise NotImplementedError

    def count_by_student(self, query: StatsQuery, window: Optional[QueryWindow]) -> Sequence[StudentCount]:
        """Per-student counts sorted ascending by count. ``window=None`` means all time."""

        raise NotImplementedError
