"""Shared helpers for the settings modules."""

import os


def env_flag(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, host: str = "", database: str = "", password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", host),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", password),
        "database": os.getenv("DB_NAME", database),
        "pool_size": int(os.getenv("DB_POOL_SIZE", "5")),
    }


STATS_EPOCH = os.getenv("STATS_EPOCH", "2024-01-01")
CLASS_COUNTER_KEY = os.getenv("CLASS_COUNTER_KEY", "classSettings")
ENFORCE_ONE_RECORD_PER_DAY = env_flag("ENFORCE_ONE_RECORD_PER_DAY")
