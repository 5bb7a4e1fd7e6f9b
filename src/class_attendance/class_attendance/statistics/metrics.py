"""Derived metrics computed from the grouped counts."""

from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import StudentCount
from ..core.constants import TREND_THRESHOLD_PERCENT
from ..core.enums import TrendDirection
from .model import DailyStat, StudentStat, TrendSummary, WeekStat


def average_per_class(daily: Sequence[DailyStat]) -> float:
    if not daily:
        return 0.0
    return round(sum(d.count for d in daily) / len(daily), 1)


def best_and_worst_day(daily: Sequence[DailyStat]) -> tuple[Optional[DailyStat], Optional[DailyStat]]:
    """Head and tail of a stable descending sort by count.

    On ties the first day with the maximum wins "best" and the last day with
    the minimum wins "worst".
    """

    if not daily:
        return None, None
    ranked = sorted(daily, key=lambda d: d.count, reverse=True)
    return ranked[0], ranked[-1]


def attendance_trend(weekly: Sequence[WeekStat]) -> TrendSummary:
    """Compare the mean of the two latest weeks with the two weeks before them."""

    if len(weekly) < 4:
        return TrendSummary()

    recent = weekly[-2:]
    older = weekly[-4:-2]
    recent_avg = sum(w.count for w in recent) / 2
    older_avg = sum(w.count for w in older) / 2
    if older_avg == 0:
        return TrendSummary()

    change = (recent_avg - older_avg) / older_avg * 100
    if change > TREND_THRESHOLD_PERCENT:
        direction = TrendDirection.UP
    elif change < -TREND_THRESHOLD_PERCENT:
        direction = TrendDirection.DOWN
    else:
        direction = TrendDirection.STABLE
    return TrendSummary(direction=direction, percentage=round(abs(change), 1))


def attendance_percentage(total_count: int, total_classes_held: int) -> float:
    if total_classes_held <= 0:
        return 0.0
    return round(total_count / total_classes_held * 100, 1)


def merge_student_counts(
    windowed: Sequence[StudentCount],
    all_time: Sequence[StudentCount],
    *,
    total_classes_held: int,
) -> list[StudentStat]:
    """Attach all-time totals to the windowed counts.

    Output keeps the windowed ordering (fewest attendances first). A student
    missing from the all-time counts gets a total of 0.
    """

    totals = {s.student_name: s.count for s in all_time}
    ordered = sorted(windowed, key=lambda s: s.count)

    stats: list[StudentStat] = []
    for s in ordered:
        total = totals.get(s.student_name, 0)
        stats.append(
            StudentStat(
                student_name=s.student_name,
                windowed_count=s.count,
                total_count=total,
                attendance_percentage=attendance_percentage(total, total_classes_held),
            )
        )
    return stats
