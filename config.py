"""
Configuration for the Gaming Hub Flask app.
Production (Railway/Render): secrets, mail credentials and DATABASE_URL are required; fails if missing.
Local: .env is loaded and SQLite is used when DATABASE_URL is not set.
"""
import os
from pathlib import Path
from datetime import timedelta

from dotenv import load_dotenv

BASE_DIR = Path(__file__).parent
load_dotenv(BASE_DIR / ".env")


def _is_production():
    """True when running on Railway, Render, or explicit production."""
    return (
        os.environ.get("RENDER") == "true"
        or os.environ.get("RAILWAY_ENVIRONMENT") is not None
        or os.environ.get("FLASK_ENV") == "production"
    )


def _env_flag(name, default="false"):
    return os.environ.get(name, default).lower() in ("true", "on", "1")


def _normalize_database_url(url):
    """Convert postgres:// to postgresql+psycopg2:// for SQLAlchemy/psycopg2."""
    if not url:
        return url
    url = url.strip()
    if url.startswith("postgres://"):
        return "postgresql+psycopg2://" + url[11:]
    if url.startswith("postgresql://") and "psycopg2" not in url:
        return "postgresql+psycopg2://" + url[13:]
    return url


def _get_database_uri(instance_dir):
    """Database URI: DATABASE_URL if set, otherwise a local SQLite file."""
    url = os.environ.get("DATABASE_URL")
    if url and url.strip():
        return _normalize_database_url(url)
    return f"sqlite:///{instance_dir / 'gaming_hub.db'}"


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get("SESSION_SECRET") or os.environ.get("SECRET_KEY") or "dev-secret-key-change-in-production"

    PERMANENT_SESSION_LIFETIME = timedelta(hours=8)
    SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    # "cookie" (signed client-side) or "memory" (server-side, keyed by token)
    SESSION_BACKEND = os.environ.get("SESSION_BACKEND", "cookie").strip().lower()

    INSTANCE_DIR = BASE_DIR / "instance"
    try:
        INSTANCE_DIR.mkdir(exist_ok=True)
    except OSError:
        pass
    SQLALCHEMY_DATABASE_URI = _get_database_uri(INSTANCE_DIR)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    MAIL_SERVER = os.environ.get("MAIL_SERVER") or "smtp.gmail.com"
    MAIL_PORT = int(os.environ.get("MAIL_PORT") or 587)
    MAIL_USE_TLS = _env_flag("MAIL_USE_TLS", "true")
    MAIL_USERNAME = os.environ.get("MAIL_USERNAME") or os.environ.get("GMAIL_USER")
    MAIL_PASSWORD = os.environ.get("MAIL_PASSWORD") or os.environ.get("GMAIL_APP_PASSWORD")
    MAIL_DEFAULT_SENDER = f"Gaming Hub <{MAIL_USERNAME}>" if MAIL_USERNAME else "Gaming Hub <noreply@gaminghub.local>"
    MAIL_VERIFY_ON_STARTUP = _env_flag("MAIL_VERIFY_ON_STARTUP")

    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")
    FORMSPREE_URL = os.environ.get("FORMSPREE_URL", "")

    PORT = int(os.environ.get("PORT") or 3000)

    REQUIRED_IN_PRODUCTION = (
        ("SECRET_KEY", "SESSION_SECRET"),
        ("MAIL_USERNAME", "MAIL_USERNAME (or GMAIL_USER)"),
        ("MAIL_PASSWORD", "MAIL_PASSWORD (or GMAIL_APP_PASSWORD)"),
        ("ADMIN_PASSWORD", "ADMIN_PASSWORD"),
    )

    @classmethod
    def validate(cls):
        """Raise RuntimeError when a required setting is missing in production."""
        if not _is_production():
            return
        missing = [env for key, env in cls.REQUIRED_IN_PRODUCTION if not getattr(cls, key, None)]
        if cls.SECRET_KEY == "dev-secret-key-change-in-production":
            missing.append("SESSION_SECRET")
        if not (os.environ.get("DATABASE_URL") or "").strip():
            missing.append("DATABASE_URL")
        if missing:
            raise RuntimeError(
                "Missing required settings in production: " + ", ".join(sorted(set(missing))) + ". "
                "Set them in your service environment variables."
            )


class TestingConfig(Config):
    """In-memory database, no outbound mail."""
    TESTING = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    MAIL_SUPPRESS_SEND = True
    MAIL_USERNAME = "hub@example.com"
    MAIL_DEFAULT_SENDER = "Gaming Hub <hub@example.com>"
    MAIL_VERIFY_ON_STARTUP = False
    ADMIN_PASSWORD = "letmein"
    FORMSPREE_URL = "https://formspree.io/f/test"
    SESSION_BACKEND = "cookie"

    @classmethod
    def validate(cls):
        return
