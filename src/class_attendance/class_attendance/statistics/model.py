from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.enums import TrendDirection


@dataclass(frozen=True)
class DailyStat:
    date: str
    count: int


@dataclass(frozen=True)
class WeekStat:
    week_start_date: str
    count: int


@dataclass(frozen=True)
class MonthStat:
    month: str
    count: int


@dataclass(frozen=True)
class StudentStat:
    student_name: str
    windowed_count: int
    total_count: int
    attendance_percentage: float = 0.0


@dataclass(frozen=True)
class TrendSummary:
    direction: TrendDirection = TrendDirection.STABLE
    percentage: float = 0.0


@dataclass(frozen=True)
class StatisticsReport:
    daily_stats: list[DailyStat] = field(default_factory=list)
    weekly_stats: list[WeekStat] = field(default_factory=list)
    monthly_stats: list[MonthStat] = field(default_factory=list)
    student_stats: list[StudentStat] = field(default_factory=list)
    total_classes_held: int = 0
    total_unique_students: int = 0
    average_attendance_per_class: float = 0.0
    best_attendance_day: Optional[DailyStat] = None
    worst_attendance_day: Optional[DailyStat] = None
    attendance_trend: TrendSummary = field(default_factory=TrendSummary)

    def to_payload(self) -> dict:
        def day(d: Optional[DailyStat]) -> Optional[dict]:
            return {"date": d.date, "count": d.count} if d else None

        return {
            "dailyStats": [day(d) for d in self.daily_stats],
            "weeklyStats": [{"weekStartDate": w.week_start_date, "count": w.count} for w in self.weekly_stats],
            "monthlyStats": [{"month": m.month, "count": m.count} for m in self.monthly_stats],
            "studentStats": [
                {
                    "studentName": s.student_name,
                    "attendanceCount": s.windowed_count,
                    "totalAttendanceCount": s.total_count,
                    "attendancePercentage": s.attendance_percentage,
                }
                for s in self.student_stats
            ],
            "totalClassesHeld": self.total_classes_held,
            "totalUniqueStudents": self.total_unique_students,
            "averageAttendancePerClass": self.average_attendance_per_class,
            "bestAttendanceDay": day(self.best_attendance_day),
            "worstAttendanceDay": day(self.worst_attendance_day),
            "attendanceTrend": {
                "direction": self.attendance_trend.direction.value,
                "percentage": self.attendance_trend.percentage,
            },
        }
