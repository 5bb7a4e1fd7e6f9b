from __future__ import annotations

import os
import threading
from collections import Counter
from datetime import date, datetime
from typing import Optional

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.class_attendance.class_attendance.attendance.filters import (
    DateRange,
    ExactDate,
    FullHistory,
    RecordedSince,
)
from src.class_attendance.class_attendance.attendance.model import AttendanceRecord, BucketCount, StudentCount
from src.class_attendance.class_attendance.class_counter.model import ClassSessionCounter
from src.class_attendance.class_attendance.common.datetime_utils import start_of_day, start_of_week
from src.class_attendance.class_attendance.container import wire
from src.class_attendance.class_attendance.core.enums import AttendanceStatus, Bucket
from src.class_attendance.class_attendance.core.exceptions import StorageError
from src.class_attendance.class_attendance.main import create_app


class InMemoryAttendance:
    """Attendance store fake that groups and filters the way the SQL adapter does."""

    def __init__(self):
        self.records: list[AttendanceRecord] = []
        self.failing: Optional[Exception] = None
        self._id = 0

    def add(
        self,
        attendance_date: str,
        student_name: str,
        status: str = "Present",
        *,
        recorded_at: datetime,
        subject: Optional[str] = None,
        section: Optional[str] = None,
    ) -> int:
        return self.create(
            attendance_date=date.fromisoformat(attendance_date),
            student_name=student_name,
            status=AttendanceStatus(status),
            recorded_at=recorded_at,
            subject=subject,
            section=section,
        )

    def _check(self) -> None:
        if self.failing is not None:
            raise self.failing

    def create(self, *, attendance_date, student_name, status, recorded_at, subject=None, section=None) -> int:
        self._check()
        self._id += 1
        self.records.append(
            AttendanceRecord(
                record_id=self._id,
                attendance_date=attendance_date,
                student_name=student_name,
                status=status,
                recorded_at=recorded_at,
                subject=subject,
                section=section,
            )
        )
        return self._id

    def exists_for_student_and_date(self, student_name: str, attendance_date: date) -> bool:
        self._check()
        return any(r.student_name == student_name and r.attendance_date == attendance_date for r in self.records)

    @staticmethod
    def _in_window(r: AttendanceRecord, window) -> bool:
        if window is None:
            return True
        if isinstance(window, ExactDate):
            return r.attendance_date == window.day
        if isinstance(window, DateRange):
            return window.start <= r.attendance_date <= window.end
        if isinstance(window, FullHistory):
            return r.recorded_at >= start_of_day(window.since)
        if isinstance(window, RecordedSince):
            return r.recorded_at >= window.start
        raise TypeError(window)

    @staticmethod
    def _matches(r: AttendanceRecord, *, student_name=None, status=None, subject=None, section=None) -> bool:
        return (
            (student_name is None or r.student_name == student_name)
            and (status is None or r.status.value == status)
            and (subject is None or r.subject == subject)
            and (section is None or r.section == section)
        )

    def find(self, query):
        self._check()
        rows = [
            r
            for r in self.records
            if self._in_window(r, query.window)
            and self._matches(
                r,
                student_name=query.student_name,
                status=query.status,
                subject=query.subject,
                section=query.section,
            )
        ]
        return sorted(rows, key=lambda r: (r.recorded_at, r.record_id))

    def _stats_rows(self, query, window):
        return [
            r
            for r in self.records
            if self._in_window(r, window)
            and self._matches(r, status=query.status, subject=query.subject, section=query.section)
        ]

    def count_by_bucket(self, bucket, query, window):
        self._check()
        keys = {
            Bucket.DAY: lambda r: r.attendance_date.isoformat(),
            Bucket.WEEK: lambda r: start_of_week(r.recorded_at.date()).isoformat(),
            Bucket.MONTH: lambda r: r.recorded_at.strftime("%Y-%m"),
        }[bucket]
        counts = Counter(keys(r) for r in self._stats_rows(query, window))
        return [BucketCount(key=k, count=c) for k, c in sorted(counts.items())]

    def count_by_student(self, query, window):
        self._check()
        counts = Counter(r.student_name for r in self._stats_rows(query, window))
        ordered = sorted(counts.items(), key=lambda kv: (kv[1], kv[0]))
        return [StudentCount(student_name=k, count=c) for k, c in ordered]


class InMemoryClassCounter:
    def __init__(self):
        self.rows: dict[str, ClassSessionCounter] = {}
        self.failing: Optional[Exception] = None
        self._lock = threading.Lock()

    def _check(self) -> None:
        if self.failing is not None:
            raise self.failing

    def get(self, config_key: str):
        self._check()
        return self.rows.get(config_key)

    def get_or_create(self, config_key: str, *, now: datetime):
        self._check()
        with self._lock:
            if config_key not in self.rows:
                self.rows[config_key] = ClassSessionCounter(config_key, 0, now)
            return self.rows[config_key]

    def increment(self, config_key: str, amount: int, *, now: datetime):
        self._check()
        with self._lock:
            current = self.rows.get(config_key)
            total = (current.total_classes_held if current else 0) + amount
            self.rows[config_key] = ClassSessionCounter(config_key, total, now)
            return self.rows[config_key]


@pytest.fixture
def fixed_now() -> datetime:
    # A Wednesday.
    return datetime(2024, 4, 17, 10, 30, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def counter_repo() -> InMemoryClassCounter:
    return InMemoryClassCounter()


@pytest.fixture
def container(attendance_repo, counter_repo):
    return wire(attendance_repo=attendance_repo, class_counter_repo=counter_repo)


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage_error() -> StorageError:
    return StorageError("connection reset by peer")
