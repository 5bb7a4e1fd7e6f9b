import os

from .config import CLASS_COUNTER_KEY, ENFORCE_ONE_RECORD_PER_DAY, STATS_EPOCH, db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# No host/database defaults: requests fail with a configuration error until they are set.
DB_CONFIG = db_config_from_env()

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = env_flag("AUTO_INIT_DB")
AUTO_SEED_DB = env_flag("AUTO_SEED_DB")
