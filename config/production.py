import os

from .config import Config, db_config_from

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")
DB_CONFIG = db_config_from(Config)

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
BREAK_CAP_SECONDS = Config.BREAK_CAP_SECONDS

AUTO_INIT_DB = Config.AUTO_INIT_DB
