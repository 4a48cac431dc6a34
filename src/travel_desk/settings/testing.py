from . import db_config_from_env

SECRET_KEY = "test-secret"

DB_CONFIG = db_config_from_env("travel_desk_test", connection_timeout=2, query_timeout_ms=2000)

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
SESSION_COOKIE_SECURE = False

AUTO_INIT_DB = False
AUTO_SEED_ADMIN = False
ADMIN_EMAIL = ""
ADMIN_PASSWORD = ""
