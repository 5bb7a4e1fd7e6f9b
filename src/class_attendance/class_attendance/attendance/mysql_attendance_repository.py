from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import start_of_day
from ..core.enums import AttendanceStatus, Bucket
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .filters import DateRange, ExactDate, FullHistory, QueryWindow, RecordedSince, RecordQuery, StatsQuery
from .model import AttendanceRecord, BucketCount, StudentCount
from .repository import AttendanceRepository

# mysql-connector only substitutes "%s", so DATE_FORMAT patterns stay single-%.
_BUCKET_EXPR = {
    Bucket.DAY: "DATE_FORMAT(attendance_date, '%Y-%m-%d')",
    Bucket.WEEK: "DATE_FORMAT(DATE_SUB(DATE(recorded_at), INTERVAL WEEKDAY(recorded_at) DAY), '%Y-%m-%d')",
    Bucket.MONTH: "DATE_FORMAT(recorded_at, '%Y-%m')",
}


def _window_clause(window: QueryWindow) -> tuple[str, list[object]]:
    if isinstance(window, ExactDate):
        return "attendance_date = %s", [window.day]
    if isinstance(window, DateRange):
        return "attendance_date BETWEEN %s AND %s", [window.start, window.end]
    if isinstance(window, FullHistory):
        return "recorded_at >= %s", [start_of_day(window.since)]
    if isinstance(window, RecordedSince):
        return "recorded_at >= %s", [window.start]
    raise TypeError(f"Unsupported window: {window!r}")


def _where(
    *,
    window: Optional[QueryWindow] = None,
    student_name: Optional[str] = None,
    status: Optional[str] = None,
    subject: Optional[str] = None,
    section: Optional[str] = None,
) -> tuple[str, tuple]:
    clauses: list[str] = []
    params: list[object] = []

    if window is not None:
        clause, values = _window_clause(window)
        clauses.append(clause)
        params.extend(values)
    for column, value in (
        ("student_name", student_name),
        ("status", status),
        ("subject", subject),
        ("section", section),
    ):
        if value is not None:
            clauses.append(f"{column}=%s")
            params.append(value)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, tuple(params)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        attendance_date=r["attendance_date"],
        student_name=r["student_name"],
        status=AttendanceStatus(r["status"]),
        recorded_at=r["recorded_at"],
        subject=r.get("subject"),
        section=r.get("section"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(attendance_date, student_name, status, subject, section, recorded_at)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (attendance_date, student_name, status.value, subject, section, recorded_at),
            )
            return int(cur.lastrowid)

    def exists_for_student_and_date(self, student_name: str, attendance_date: date) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT 1 AS found FROM attendance_records WHERE student_name=%s AND attendance_date=%s LIMIT 1",
                (student_name, attendance_date),
            )
            return fetchone(cur) is not None

    def find(self, query: RecordQuery) -> Sequence[AttendanceRecord]:
        where, params = _where(
            window=query.window,
            student_name=query.student_name,
            status=query.status,
            subject=query.subject,
            section=query.section,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, attendance_date, student_name, status, subject, section, recorded_at
                FROM attendance_records
                {where}
                ORDER BY recorded_at ASC, record_id ASC
                """,
                params,
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_bucket(
        self,
        bucket: Bucket,
        query: StatsQuery,
        window: Optional[QueryWindow],
    ) -> Sequence[BucketCount]:
        where, params = _where(window=window, status=query.status, subject=query.subject, section=query.section)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BUCKET_EXPR[bucket]} AS bucket, COUNT(*) AS total
                FROM attendance_records
                {where}
                GROUP BY bucket
                ORDER BY bucket ASC
                """,
                params,
            )
            return [BucketCount(key=str(r["bucket"]), count=int(r["total"])) for r in fetchall(cur)]

    def count_by_student(self, query: StatsQuery, window: Optional[QueryWindow]) -> Sequence[StudentCount]:
        where, params = _where(window=window, status=query.status, subject=query.subject, section=query.section)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT student_name, COUNT(*) AS total
                FROM attendance_records
                {where}
                GROUP BY student_name
                ORDER BY total ASC, student_name ASC
                """,
                params,
            )
            return [StudentCount(student_name=r["student_name"], count=int(r["total"])) for r in fetchall(cur)]
