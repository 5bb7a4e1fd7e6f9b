from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ClassSessionCounter
from .repository import ClassCounterRepository

_SELECT = "SELECT config_key, total_classes_held, updated_at FROM class_counters WHERE config_key=%s"


def _to_counter(r: dict) -> ClassSessionCounter:
    return ClassSessionCounter(
        config_key=r["config_key"],
        total_classes_held=int(r["total_classes_held"]),
        updated_at=r["updated_at"],
    )


class MySQLClassCounterRepository(ClassCounterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, config_key: str) -> Optional[ClassSessionCounter]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT, (config_key,))
            r = fetchone(cur)
            return _to_counter(r) if r else None

    def get_or_create(self, config_key: str, *, now: datetime) -> ClassSessionCounter:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO class_counters(config_key, total_classes_held, updated_at) VALUES(%s, 0, %s)",
                (config_key, now),
            )
            cur.execute(_SELECT, (config_key,))
            return _to_counter(fetchone(cur))

    def increment(self, config_key: str, amount: int, *, now: datetime) -> ClassSessionCounter:
        # Single upsert statement: the row lock taken here serializes concurrent increments.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_counters(config_key, total_classes_held, updated_at)
                VALUES(%s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    total_classes_held = total_classes_held + %s,
                    updated_at = %s
                """,
                (config_key, int(amount), now, int(amount), now),
            )
            cur.execute(_SELECT, (config_key,))
            return _to_counter(fetchone(cur))
