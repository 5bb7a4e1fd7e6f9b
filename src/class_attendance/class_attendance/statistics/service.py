from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..attendance.filters import QueryWindow, RecordedSince, StatsQuery
from ..attendance.repository import AttendanceRepository
from ..class_counter.service import ClassCounterService
from ..common.datetime_utils import first_day_months_back, now_local, start_of_day, start_of_week
from ..core.constants import (
    DAILY_WINDOW_DAYS,
    MONTHLY_WINDOW_MONTHS,
    STUDENT_WINDOW_DAYS,
    WEEKLY_WINDOW_DAYS,
)
from ..core.enums import Bucket
from ..core.exceptions import StatisticsUnavailableError, StorageError
from . import metrics
from .model import DailyStat, MonthStat, StatisticsReport, WeekStat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportWindows:
    daily: QueryWindow
    weekly: QueryWindow
    monthly: QueryWindow
    students: QueryWindow


def resolve_windows(query: StatsQuery, today: date) -> ReportWindows:
    """Pick the window of each statistic.

    An explicit range or full history applies to every statistic; otherwise
    each one gets its own rolling default, measured on the recording time.
    """

    if query.window is not None:
        return ReportWindows(query.window, query.window, query.window, query.window)

    return ReportWindows(
        daily=RecordedSince(start_of_day(today - timedelta(days=DAILY_WINDOW_DAYS - 1))),
        weekly=RecordedSince(start_of_day(start_of_week(today - timedelta(days=WEEKLY_WINDOW_DAYS)))),
        monthly=RecordedSince(start_of_day(first_day_months_back(today, MONTHLY_WINDOW_MONTHS))),
        students=RecordedSince(start_of_day(today - timedelta(days=STUDENT_WINDOW_DAYS))),
    )


class StatisticsService:
    """Builds the attendance statistics report. Read-only."""

    def __init__(self, attendance: AttendanceRepository, class_counter: ClassCounterService):
        self._attendance = attendance
        self._class_counter = class_counter

    def build_report(self, query: StatsQuery, *, now: Optional[datetime] = None) -> StatisticsReport:
        today = (now or now_local()).date()
        try:
            return self._build(query, today)
        except StorageError as exc:
            logger.exception("Statistics aggregation failed")
            raise StatisticsUnavailableError("Statistics are currently unavailable.") from exc

    def _build(self, query: StatsQuery, today: date) -> StatisticsReport:
        windows = resolve_windows(query, today)

        daily = [
            DailyStat(date=b.key, count=b.count)
            for b in self._attendance.count_by_bucket(Bucket.DAY, query, windows.daily)
        ]
        weekly = [
            WeekStat(week_start_date=b.key, count=b.count)
            for b in self._attendance.count_by_bucket(Bucket.WEEK, query, windows.weekly)
        ]
        monthly = [
            MonthStat(month=b.key, count=b.count)
            for b in self._attendance.count_by_bucket(Bucket.MONTH, query, windows.monthly)
        ]
        windowed_students = self._attendance.count_by_student(query, windows.students)
        all_time_students = self._attendance.count_by_student(query, None)
        total_classes_held = self._class_counter.current_total()

        best, worst = metrics.best_and_worst_day(daily)
        return StatisticsReport(
            daily_stats=daily,
            weekly_stats=weekly,
            monthly_stats=monthly,
            student_stats=metrics.merge_student_counts(
                windowed_students, all_time_students, total_classes_held=total_classes_held
            ),
            total_classes_held=total_classes_held,
            total_unique_students=len({s.student_name for s in all_time_students}),
            average_attendance_per_class=metrics.average_per_class(daily),
            best_attendance_day=best,
            worst_attendance_day=worst,
            attendance_trend=metrics.attendance_trend(weekly),
        )
