from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env if present
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


def _engine_options() -> dict:
    # Hosted Postgres instances often keep the blog tables in their own schema
    schema = os.getenv("DATABASE_SCHEMA")
    if not schema:
        return {}
    return {"connect_args": {"options": f"-c search_path={schema}"}}


class Config:
    SECRET_KEY: str = os.getenv("SECRET_KEY", os.urandom(32).hex())

    SITE_NAME = os.getenv("SITE_NAME", "Blog CRM")

    # Author pre-filled in the editor for new posts
    DEFAULT_POST_AUTHOR = os.getenv("DEFAULT_POST_AUTHOR", "Dom Pogrzebowy Łódź")

    # Database
    # Read from environment and then unset for security
    SQLALCHEMY_DATABASE_URI: str | None = os.environ.pop("DATABASE_URL", None)
    SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options()

    # Sessions
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = os.getenv("FLASK_ENV", "production") == "production"
    SESSION_COOKIE_SAMESITE = "Strict"
    SESSION_COOKIE_PATH = "/"
    SESSION_LIFETIME_MINUTES = int(os.getenv("SESSION_LIFETIME_MINUTES", "30"))
    ABSOLUTE_SESSION_MAX_AGE_SECONDS = int(os.getenv("ABSOLUTE_SESSION_MAX_AGE_SECONDS", str(4 * 60 * 60)))

    # Uploads and limits
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(1 * 1024 * 1024)))

    # Rate limiting
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Security headers
    SECURITY_CSP = (
        "default-src 'none'; "
        "base-uri 'none'; "
        "frame-ancestors 'none'"
    )
    SECURITY_HSTS_SECONDS = 31536000
    SECURITY_PERMISSIONS_POLICY = (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=(), "
        "magnetometer=(), gyroscope=(), accelerometer=()"
    )

    # Flask env
    ENV = os.getenv("FLASK_ENV", "production")
    DEBUG = ENV != "production"
