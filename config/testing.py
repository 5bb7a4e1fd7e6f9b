import os

from .config import CLASS_COUNTER_KEY, STATS_EPOCH, db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env(host="localhost", database="attendance_test")

DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

AUTO_INIT_DB = False
AUTO_SEED_DB = False
ENFORCE_ONE_RECORD_PER_DAY = False
