from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Statuses accepted when recording attendance."""

    PRESENT = "Present"
    ABSENT = "Absent"
    JUSTIFIED = "Justified"


class Bucket(str, Enum):
    """Grouping keys used by the statistics queries."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
