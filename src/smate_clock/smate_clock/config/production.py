import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smate_clock"),
}

AUTH_CONFIG = {
    "issuer": os.getenv("AUTH_ISSUER_BASE_URL", ""),
    "audience": os.getenv("AUTH_AUDIENCE", ""),
    "role_claim": os.getenv("AUTH_ROLE_CLAIM", "https://smate/role"),
}

STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

FRONTEND_URL = os.getenv("FRONTEND_URL", "")
CORS_ALLOW_ALL = False

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
