from .config import Config, db_config_from

SECRET_KEY = "test-secret"
DB_CONFIG = db_config_from(Config)

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
BREAK_CAP_SECONDS = 3600

AUTO_INIT_DB = False
