import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "daily_report_test_db"),
}

JWT_SECRET = "test-jwt-secret-0123456789-abcdefghijklmnop"
ACCESS_TOKEN_DAYS = 7
REFRESH_TOKEN_DAYS = 30

PASSWORD_REQUIRE_SPECIAL = False

DEBUG = False
TESTING = True
LOG_LEVEL = "DEBUG"
LOG_JSON = False

AUTO_INIT_DB = False
