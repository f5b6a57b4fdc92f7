"""
Application configuration settings.
Loads from .env file first (overrides shell env for local dev), then pydantic reads from environment.
Production: set env vars in the platform (Docker, K8s, etc.); .env is optional.

All backend-related configs and constants are centralized here.
"""
from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve .env path: hiretrack/.env (absolute path, works regardless of cwd)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = (_BASE_DIR / ".env").resolve()

# Load .env into environment BEFORE pydantic reads. override=True ensures .env
# values override any shell env.
# When .env doesn't exist (prod), this is a no-op; platform env vars are used.
if _ENV_FILE.exists():
    load_dotenv(_ENV_FILE, override=True)


class Settings(BaseSettings):
    """Application settings. Source: env vars (after dotenv load)."""

    # App
    app_name: str = "HireTrack"
    app_version: str = "1.0.0"
    port: int = 3001
    frontend_url: str = "http://localhost:3000"

    # Database
    database_url: str = "sqlite:///./hiretrack.db"

    # Auth
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Upload & storage
    upload_dir: str = "uploads/cvs"
    max_upload_bytes: int = 10 * 1024 * 1024

    # Redis
    redis_url: str = ""

    # Cache TTLs (seconds)
    application_stats_cache_ttl: int = 120

    # AWS S3
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    aws_region: str = "us-east-1"
    aws_bucket_name: str = "hiretrack-files"
    s3_key_prefix: str = "cvs"

    # Email (SMTP). Empty smtp_host = log-only transport for development.
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout: int = 30
    email_from: str = '"HireTrack" <noreply@hiretrack.com>'

    # Scheduled jobs
    scheduler_enabled: bool = True
    reminder_sweep_interval_minutes: int = 15
    weekly_summary_enabled: bool = True
    weekly_summary_day: str = "mon"
    weekly_summary_hour: int = 9

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


# --- Constants (non-env, business config) ---

# Reminders
UPCOMING_WINDOW_DAYS: int = 7

# Applications
APPLICATION_STATUSES: tuple[str, ...] = ("APPLIED", "INTERVIEW", "OFFER", "REJECTED")
# status -> timestamp column stamped the first time the status is set
STATUS_TIMESTAMP_FIELDS: dict[str, str] = {
    "INTERVIEW": "interview_date",
    "OFFER": "offer_received_at",
    "REJECTED": "rejected_at",
}

# CV upload
CV_ALLOWED_EXTENSIONS: frozenset[str] = frozenset({".pdf", ".doc", ".docx"})
CV_MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

# Email templates
EMAIL_TEMPLATE_DIR: Path = _BASE_DIR / "templates" / "email"
