import os
from datetime import timedelta

from dotenv import load_dotenv

# Load .env from the working directory so local settings are picked up
load_dotenv()


def _env_bool(name, default):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    ENV = os.environ.get("FLASK_ENV", os.environ.get("ENV", "development"))
    DEBUG = os.environ.get("FLASK_DEBUG", "0") == "1"
    TESTING = False
    JSON_SORT_KEYS = False

    HOST = os.environ.get("HOST", "0.0.0.0")
    PORT = int(os.environ.get("PORT", "5000"))
    API_VERSION = "1.0.0"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE = os.environ.get("LOG_FILE")

    # No default: the app refuses to start without a signing secret.
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.environ.get("JWT_EXPIRES_HOURS", "24")))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get("JWT_REFRESH_EXPIRES_DAYS", "7")))
    JWT_ENCODE_ISSUER = JWT_DECODE_ISSUER = os.environ.get("JWT_ISSUER", "task-manager-api")
    JWT_ENCODE_AUDIENCE = JWT_DECODE_AUDIENCE = os.environ.get("JWT_AUDIENCE", "task-manager-users")

    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///taskmanager.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    DB_POOL_SIZE = int(os.environ.get("DB_POOL_SIZE", "20"))
    DB_POOL_TIMEOUT = float(os.environ.get("DB_POOL_TIMEOUT", "2"))
    DB_POOL_RECYCLE = int(os.environ.get("DB_POOL_RECYCLE", "30"))
    DB_CONNECT_RETRIES = int(os.environ.get("DB_CONNECT_RETRIES", "5"))
    DB_CONNECT_DELAY = float(os.environ.get("DB_CONNECT_DELAY", "1.0"))

    # 12 rounds keeps a verify around a quarter second on commodity hardware
    BCRYPT_LOG_ROUNDS = int(os.environ.get("BCRYPT_LOG_ROUNDS", "12"))

    REMINDER_SWEEP_ENABLED = _env_bool("REMINDER_SWEEP_ENABLED", "1")
    REMINDER_SWEEP_INTERVAL_SECONDS = int(os.environ.get("REMINDER_SWEEP_INTERVAL_SECONDS", "60"))

    # Flask-Limiter; memory:// counters are per process
    RATELIMIT_ENABLED = _env_bool("RATELIMIT_ENABLED", "1")
    GLOBAL_RATE_LIMIT = os.environ.get("GLOBAL_RATE_LIMIT", "100 per 15 minutes")
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_HEADERS_ENABLED = True
    AUTH_RATE_LIMIT = os.environ.get("AUTH_RATE_LIMIT", "5 per 15 minutes")


class TestingConfig(Config):
    ENV = "testing"
    TESTING = True
    LOG_LEVEL = "WARNING"
    LOG_FILE = None
    JWT_SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    DB_CONNECT_RETRIES = 1
    DB_CONNECT_DELAY = 0.0
    BCRYPT_LOG_ROUNDS = 4
    REMINDER_SWEEP_ENABLED = False
    RATELIMIT_ENABLED = False
