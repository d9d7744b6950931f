import os

from dotenv import load_dotenv

# .env at the project root, if present
load_dotenv()


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./briklyst.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_TEST = ENV_NORMALIZED == "test"
IS_PROD = ENV_NORMALIZED in {"prod", "production"}

APP_URL = os.getenv("APP_URL", "http://localhost:3000").rstrip("/")

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

# Auth (JWT)
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-only-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", str(60 * 24 * 7)))

# Email
SMTP_HOST = os.getenv("SMTP_HOST", "").strip()
SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
SMTP_USER = os.getenv("SMTP_USER", "").strip()
SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
SMTP_USE_TLS = _env_flag("SMTP_USE_TLS", "1")
EMAIL_FROM = os.getenv("EMAIL_FROM", "Briklyst <no-reply@briklyst.com>")

# Jobs
CRON_SECRET = os.getenv("CRON_SECRET", "").strip()
WEEKLY_REPORT_MAX_CONCURRENCY = max(1, int(os.getenv("WEEKLY_REPORT_MAX_CONCURRENCY", "4")))

INTERNAL_METRICS_TOKEN = os.getenv("INTERNAL_METRICS_TOKEN", "").strip()

# Migrations: upgrade to head on startup (defaults on in production)
AUTO_APPLY_MIGRATIONS = _env_flag("AUTO_APPLY_MIGRATIONS", "1" if IS_PROD else "")
