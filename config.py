import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./cv_match.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))

    # Session cookie (signed JWT)
    AUTH_SECRET = data.get("AUTH_SECRET", "dev-secret-change-in-production")
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "cv_session")
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))

    # Password reset
    PASSWORD_RESET_TOKEN_TTL_MINUTES = int(data.get("PASSWORD_RESET_TOKEN_TTL_MINUTES", 30))
    PASSWORD_RESET_MAX_REQUESTS = int(data.get("PASSWORD_RESET_MAX_REQUESTS", 3))
    PASSWORD_RESET_WINDOW_SECONDS = int(data.get("PASSWORD_RESET_WINDOW_SECONDS", 60))
    TOKEN_HASH_ROUNDS = int(data.get("TOKEN_HASH_ROUNDS", 10))
    PASSWORD_HASH_ROUNDS = int(data.get("PASSWORD_HASH_ROUNDS", 12))

    # Outbound email (Resend)
    APP_URL = data.get("APP_URL", "http://localhost:3000")
    RESEND_API_KEY = data.get("RESEND_API_KEY", "")
    EMAIL_FROM = data.get("EMAIL_FROM", "onboarding@resend.dev")
    EMAIL_TIMEOUT_SECONDS = float(data.get("EMAIL_TIMEOUT_SECONDS", 10))
