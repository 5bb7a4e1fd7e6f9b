from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .class_counter.mysql_class_counter_repository import MySQLClassCounterRepository
from .class_counter.repository import ClassCounterRepository
from .class_counter.service import ClassCounterService
from .common.datetime_utils import parse_iso_date
from .core.constants import DEFAULT_CLASS_COUNTER_KEY, DEFAULT_STATS_EPOCH
from .database.bootstrap import db_config_from_dict
from .database.connection import DatabaseConnection
from .statistics.service import StatisticsService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    class_counter_repo: ClassCounterRepository

    attendance_service: AttendanceService
    class_counter_service: ClassCounterService
    statistics_service: StatisticsService

    stats_epoch: date


def wire(
    *,
    attendance_repo: AttendanceRepository,
    class_counter_repo: ClassCounterRepository,
    conn: Optional[DatabaseConnection] = None,
    stats_epoch: date = parse_iso_date(DEFAULT_STATS_EPOCH),
    class_counter_key: str = DEFAULT_CLASS_COUNTER_KEY,
    enforce_one_per_day: bool = False,
) -> Container:
    """Assemble services around the given repositories."""

    attendance_service = AttendanceService(attendance_repo, enforce_one_per_day=enforce_one_per_day)
    class_counter_service = ClassCounterService(class_counter_repo, config_key=class_counter_key)
    statistics_service = StatisticsService(attendance_repo, class_counter_service)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        class_counter_repo=class_counter_repo,
        attendance_service=attendance_service,
        class_counter_service=class_counter_service,
        statistics_service=statistics_service,
        stats_epoch=stats_epoch,
    )


def build_container(
    *,
    db_config: dict,
    stats_epoch: str = DEFAULT_STATS_EPOCH,
    class_counter_key: str = DEFAULT_CLASS_COUNTER_KEY,
    enforce_one_per_day: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(db_config_from_dict(db_config))

    return wire(
        attendance_repo=MySQLAttendanceRepository(conn),
        class_counter_repo=MySQLClassCounterRepository(conn),
        conn=conn,
        stats_epoch=parse_iso_date(stats_epoch),
        class_counter_key=class_counter_key,
        enforce_one_per_day=enforce_one_per_day,
    )
