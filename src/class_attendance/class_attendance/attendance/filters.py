"""Translate request parameters into typed query descriptors.

A window is one of a small set of tagged variants, so combinations such as
"an exact day and a range at once" cannot be expressed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional, Union

from ..common.validators import require_iso_date
from ..core.constants import DEFAULT_STATS_STATUS
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ExactDate:
    day: date


@dataclass(frozen=True)
class DateRange:
    """Inclusive range over the caller-supplied attendance date."""

    start: date
    end: date


@dataclass(frozen=True)
class FullHistory:
    """Everything recorded since ``since`` (the configured epoch)."""

    since: date


@dataclass(frozen=True)
class RecordedSince:
    """Everything recorded (server time) at or after ``start``."""

    start: datetime


RecordWindow = Union[ExactDate, DateRange]
StatsWindow = Union[DateRange, FullHistory]
QueryWindow = Union[ExactDate, DateRange, FullHistory, RecordedSince]


@dataclass(frozen=True)
class RecordQuery:
    window: Optional[RecordWindow] = None
    student_name: Optional[str] = None
    subject: Optional[str] = None
    section: Optional[str] = None
    status: Optional[str] = None

    def label(self) -> str:
        if isinstance(self.window, ExactDate):
            return self.window.day.isoformat()
        if isinstance(self.window, DateRange):
            return f"{self.window.start.isoformat()}_{self.window.end.isoformat()}"
        return self.student_name or "records"


@dataclass(frozen=True)
class StatsQuery:
    window: Optional[StatsWindow] = None
    status: str = DEFAULT_STATS_STATUS
    subject: Optional[str] = None
    section: Optional[str] = None


def _text(args: Mapping[str, str], name: str) -> Optional[str]:
    value = args.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _date(args: Mapping[str, str], name: str) -> Optional[date]:
    value = _text(args, name)
    return require_iso_date(value, name) if value else None


def _range(start: date, end: date) -> DateRange:
    if start > end:
        raise ValidationError("Invalid date range: dateFrom must not be after dateTo.")
    return DateRange(start=start, end=end)


def _is_true(value: Optional[str]) -> bool:
    return (value or "").strip().lower() == "true"


def parse_record_query(args: Mapping[str, str]) -> RecordQuery:
    """Build the filter for listing/exporting records.

    ``date`` and ``dateFrom``/``dateTo`` are mutually exclusive. At least one of
    them, or ``studentName``, is required.
    """

    day = _date(args, "date")
    date_from = _date(args, "dateFrom")
    date_to = _date(args, "dateTo")
    student_name = _text(args, "studentName")

    window: Optional[RecordWindow] = None
    if day is not None:
        if date_from is not None or date_to is not None:
            raise ValidationError("Use either date or dateFrom/dateTo, not both.")
        window = ExactDate(day=day)
    elif date_from is not None or date_to is not None:
        if date_from is None:
            raise ValidationError("Missing dateFrom: a date range needs both dateFrom and dateTo.")
        if date_to is None:
            raise ValidationError("Missing dateTo: a date range needs both dateFrom and dateTo.")
        window = _range(date_from, date_to)

    if window is None and student_name is None:
        raise ValidationError("Missing required filter: supply date, dateFrom and dateTo, or studentName.")

    return RecordQuery(
        window=window,
        student_name=student_name,
        subject=_text(args, "subject"),
        section=_text(args, "section"),
        status=_text(args, "status"),
    )


def parse_stats_query(args: Mapping[str, str], *, epoch: date) -> StatsQuery:
    """Build the filter for the statistics report.

    Resolution order: ``fullHistory=true`` wins, then a complete
    ``dateFrom``/``dateTo`` range, otherwise the per-statistic default windows
    apply (``window`` is None).
    """

    date_from = _date(args, "dateFrom")
    date_to = _date(args, "dateTo")

    window: Optional[StatsWindow] = None
    if _is_true(args.get("fullHistory")):
        window = FullHistory(since=epoch)
    elif date_from is not None and date_to is not None:
        window = _range(date_from, date_to)

    return StatsQuery(
        window=window,
        status=_text(args, "status") or DEFAULT_STATS_STATUS,
        subject=_text(args, "subject"),
        section=_text(args, "section"),
    )
