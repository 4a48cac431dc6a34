import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module, 'development' by default.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "travel_desk.settings.production"

    if env in {"test", "testing"}:
        return "travel_desk.settings.testing"

    return "travel_desk.settings.development"


def db_config_from_env(default_database: str = "travel_desk", **overrides) -> dict:
    """``DB_CONFIG`` dict from DB_* environment variables; ``overrides`` win."""
    db_config = {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", ""),
        "database": os.getenv("DB_NAME", default_database),
        "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
        "query_timeout_ms": int(os.getenv("DB_QUERY_TIMEOUT_MS", "5000")),
    }
    db_config.update(overrides)
    return db_config
