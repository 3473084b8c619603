import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smate_clock_test"),
}

AUTH_CONFIG = {
    "issuer": "https://issuer.test",
    "audience": "smate-test",
    "role_claim": "https://smate/role",
}

STORE_TIMEOUT_SECONDS = 2

FRONTEND_URL = "http://localhost:3000"
CORS_ALLOW_ALL = True

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
