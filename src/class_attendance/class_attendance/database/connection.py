from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling

from ..core.exceptions import ConfigurationError, StorageError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    def is_complete(self) -> bool:
        return bool(self.host and self.database and self.user)

    def describe(self) -> str:
        return f"{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Process-wide connection factory backed by a lazily created pool.

    The pool is built on the first ``connect()`` call. If building it fails the
    handle is discarded so the next call tries again; stale pooled connections
    are reconnected by mysql-connector when they are handed out.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = DatabaseConnection(config)
            return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        if not self._config.is_complete():
            logger.error("Database configuration is incomplete (%s)", self._config.describe())
            raise ConfigurationError("Database configuration is incomplete")

        with self._pool_lock:
            if self._pool is None:
                logger.info("Creating MySQL connection pool for %s", self._config.describe())
                try:
                    self._pool = pooling.MySQLConnectionPool(
                        pool_name="class_attendance",
                        pool_size=int(self._config.pool_size),
                        pool_reset_session=True,
                        host=self._config.host,
                        port=int(self._config.port),
                        user=self._config.user,
                        password=self._config.password,
                        database=self._config.database,
                    )
                except mysql.connector.Error as exc:
                    self._pool = None
                    raise StorageError("Could not connect to the database") from exc
            return self._pool

    def connect(self):
        pool = self._get_pool()
        try:
            return pool.get_connection()
        except mysql.connector.Error as exc:
            raise StorageError("Could not obtain a database connection") from exc
