from datetime import date, datetime

import pytest

from src.class_attendance.class_attendance.attendance.filters import DateRange, FullHistory, RecordedSince, StatsQuery
from src.class_attendance.class_attendance.core.exceptions import StatisticsUnavailableError
from src.class_attendance.class_attendance.statistics.model import DailyStat, MonthStat, WeekStat
from src.class_attendance.class_attendance.statistics.service import resolve_windows


@pytest.fixture
def service(container):
    return container.statistics_service


@pytest.fixture
def seeded(attendance_repo, counter_repo, fixed_now):
    attendance_repo.add("2024-04-15", "Ana", recorded_at=datetime(2024, 4, 15, 9, 0))
    attendance_repo.add("2024-04-15", "Bruno", recorded_at=datetime(2024, 4, 15, 9, 5))
    attendance_repo.add("2024-04-16", "Ana", recorded_at=datetime(2024, 4, 16, 9, 0))
    attendance_repo.add("2024-04-16", "Bruno", "Absent", recorded_at=datetime(2024, 4, 16, 9, 2))
    attendance_repo.add("2024-02-10", "Carla", recorded_at=datetime(2024, 2, 10, 8, 0))
    counter_repo.increment("classSettings", 4, now=fixed_now)
    return attendance_repo


def test_default_windows_are_rolling(fixed_now):
    windows = resolve_windows(StatsQuery(), fixed_now.date())

    assert windows.daily == RecordedSince(datetime(2024, 4, 11))
    assert windows.weekly == RecordedSince(datetime(2024, 3, 18))
    assert windows.monthly == RecordedSince(datetime(2024, 1, 1))
    assert windows.students == RecordedSince(datetime(2024, 3, 18))


def test_explicit_window_applies_to_every_statistic(fixed_now):
    window = DateRange(date(2024, 4, 1), date(2024, 4, 7))

    windows = resolve_windows(StatsQuery(window=window), fixed_now.date())

    assert {windows.daily, windows.weekly, windows.monthly, windows.students} == {window}


def test_duplicates_are_counted(service, attendance_repo, fixed_now):
    attendance_repo.add("2024-04-01", "Ana", recorded_at=datetime(2024, 4, 16, 9, 0))
    attendance_repo.add("2024-04-01", "Ana", recorded_at=datetime(2024, 4, 16, 9, 1))

    report = service.build_report(StatsQuery(), now=fixed_now)

    assert report.daily_stats == [DailyStat("2024-04-01", 2)]


def test_report_with_default_windows(service, seeded, fixed_now):
    report = service.build_report(StatsQuery(), now=fixed_now)

    assert report.daily_stats == [DailyStat("2024-04-15", 2), DailyStat("2024-04-16", 1)]
    assert report.weekly_stats == [WeekStat("2024-04-15", 3)]
    assert report.monthly_stats == [MonthStat("2024-02", 1), MonthStat("2024-04", 3)]
    assert [(s.student_name, s.windowed_count, s.total_count) for s in report.student_stats] == [
        ("Bruno", 1, 1),
        ("Ana", 2, 2),
    ]
    assert [s.attendance_percentage for s in report.student_stats] == [25.0, 50.0]
    assert report.total_classes_held == 4
    assert report.total_unique_students == 3
    assert report.average_attendance_per_class == 1.5
    assert report.best_attendance_day == DailyStat("2024-04-15", 2)
    assert report.worst_attendance_day == DailyStat("2024-04-16", 1)
    assert report.attendance_trend.direction.value == "stable"


def test_weekly_keys_are_mondays(service, attendance_repo, fixed_now):
    attendance_repo.add("2024-03-28", "Ana", recorded_at=datetime(2024, 3, 28, 9, 0))
    attendance_repo.add("2024-04-07", "Ana", recorded_at=datetime(2024, 4, 7, 9, 0))
    attendance_repo.add("2024-04-17", "Ana", recorded_at=datetime(2024, 4, 17, 9, 0))

    report = service.build_report(StatsQuery(), now=fixed_now)

    assert [w.week_start_date for w in report.weekly_stats] == ["2024-03-25", "2024-04-01", "2024-04-15"]
    assert all(date.fromisoformat(w.week_start_date).weekday() == 0 for w in report.weekly_stats)


def test_total_count_never_below_windowed_count(service, seeded, fixed_now):
    report = service.build_report(StatsQuery(), now=fixed_now)

    assert all(s.total_count >= s.windowed_count for s in report.student_stats)


def test_report_is_idempotent(service, seeded, fixed_now):
    assert service.build_report(StatsQuery(), now=fixed_now) == service.build_report(StatsQuery(), now=fixed_now)


def test_single_day_range(service, seeded, fixed_now):
    day = date(2024, 4, 15)

    report = service.build_report(StatsQuery(window=DateRange(day, day)), now=fixed_now)

    assert report.daily_stats == [DailyStat("2024-04-15", 2)]
    assert report.weekly_stats == [WeekStat("2024-04-15", 2)]
    assert [s.student_name for s in report.student_stats] == ["Ana", "Bruno"]


def test_full_history_starts_at_epoch(service, seeded, attendance_repo, fixed_now):
    attendance_repo.add("2023-12-01", "Dario", recorded_at=datetime(2023, 12, 1, 9, 0))

    report = service.build_report(StatsQuery(window=FullHistory(date(2024, 1, 1))), now=fixed_now)

    assert [d.date for d in report.daily_stats] == ["2024-02-10", "2024-04-15", "2024-04-16"]
    assert "Dario" not in {s.student_name for s in report.student_stats}


def test_unknown_status_gives_empty_report(service, seeded, fixed_now):
    payload = service.build_report(StatsQuery(status="Ausente"), now=fixed_now).to_payload()

    assert payload["dailyStats"] == []
    assert payload["weeklyStats"] == []
    assert payload["monthlyStats"] == []
    assert payload["studentStats"] == []
    assert payload["totalUniqueStudents"] == 0
    assert payload["averageAttendancePerClass"] == 0
    assert payload["bestAttendanceDay"] is None
    assert payload["worstAttendanceDay"] is None
    assert payload["attendanceTrend"] == {"direction": "stable", "percentage": 0}


def test_report_does_not_create_counter(service, attendance_repo, counter_repo, fixed_now):
    attendance_repo.add("2024-04-16", "Ana", recorded_at=datetime(2024, 4, 16, 9, 0))

    report = service.build_report(StatsQuery(), now=fixed_now)

    assert report.total_classes_held == 0
    assert report.student_stats[0].attendance_percentage == 0.0
    assert counter_repo.rows == {}


def test_storage_failure_is_reported_as_unavailable(service, attendance_repo, storage_error, fixed_now):
    attendance_repo.failing = storage_error

    with pytest.raises(StatisticsUnavailableError) as exc_info:
        service.build_report(StatsQuery(), now=fixed_now)

    assert exc_info.value.__cause__ is storage_error
