import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key"

    # Настройки БД
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "timetracker_db")

    # Daily break limit, seconds
    BREAK_CAP_SECONDS = int(os.environ.get("BREAK_CAP_SECONDS", "3600"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Dev helpers
    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))


def db_config_from(cfg: type[Config] = Config) -> dict:
    """mysql-connector style dict used by the container."""
    return {
        "host": cfg.DB_HOST,
        "port": cfg.DB_PORT,
        "user": cfg.DB_USER,
        "password": cfg.DB_PASSWORD,
        "database": cfg.DB_NAME,
    }
