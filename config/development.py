import os

from .config import Config, db_config_from

SECRET_KEY = Config.SECRET_KEY
DB_CONFIG = db_config_from(Config)

DEBUG = True
LOG_LEVEL = Config.LOG_LEVEL
BREAK_CAP_SECONDS = Config.BREAK_CAP_SECONDS

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
