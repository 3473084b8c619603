import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "smate_clock"),
}

AUTH_CONFIG = {
    "issuer": os.getenv("AUTH_ISSUER_BASE_URL", "http://localhost:8080"),
    "audience": os.getenv("AUTH_AUDIENCE", "smate-api"),
    "role_claim": os.getenv("AUTH_ROLE_CLAIM", "https://smate/role"),
}

STORE_TIMEOUT_SECONDS = int(os.getenv("STORE_TIMEOUT_SECONDS", "5"))

# Browser origin allowed by CORS; any origin is accepted while CORS_ALLOW_ALL is set.
FRONTEND_URL = os.getenv("FRONTEND_URL", "")
CORS_ALLOW_ALL = True

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
