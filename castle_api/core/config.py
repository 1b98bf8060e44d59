"""
Configuration helpers for the Castle Clothing backend.

Settings are read once from the environment (database, Cloudinary, SMTP,
bootstrap admin, listen address) so that routers/services never touch
os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import find_dotenv, load_dotenv
from sqlalchemy.engine import URL

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    database_url: str
    db_pool_size: int
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_folder: str
    smtp_host: str
    smtp_port: int
    smtp_user: str
    smtp_password: str
    smtp_from: str
    admin_username: str
    admin_password: str
    cors_origins: tuple[str, ...]
    host: str
    port: int
    log_level: str


def _mysql_url() -> str:
    url = URL.create(
        "mysql+pymysql",
        username=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD") or None,
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=_int(os.getenv("MYSQL_PORT", "3306"), 3306),
        database=os.getenv("MYSQL_DATABASE", "castle"),
    )
    return url.render_as_string(hide_password=False)


def _int(value: str | None, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _log_level(value: str | None, default: str = "INFO") -> str:
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else default


def _csv(value: str | None) -> tuple[str, ...]:
    items = tuple(part.strip() for part in (value or "").split(",") if part.strip())
    return items or ("*",)


@lru_cache
def get_settings() -> Settings:
    """Read the current environment (plus a .env file, if any) and build a Settings instance."""
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        # variables already exported win over the file
        load_dotenv(dotenv_path, override=False)
    smtp_user = os.getenv("EMAIL_USER") or os.getenv("SMTP_USER", "")
    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=(os.getenv("DATABASE_URL") or "").strip() or _mysql_url(),
        db_pool_size=max(1, _int(os.getenv("DB_POOL_SIZE", "10"), 10)),
        cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
        cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
        cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", ""),
        smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
        smtp_port=_int(os.getenv("SMTP_PORT", "465"), 465),
        smtp_user=smtp_user,
        smtp_password=os.getenv("EMAIL_PASSWORD") or os.getenv("SMTP_PASSWORD", ""),
        smtp_from=os.getenv("EMAIL_FROM", smtp_user),
        admin_username=os.getenv("ADMIN_USERNAME", "admin"),
        admin_password=os.getenv("ADMIN_PASSWORD", "admin123"),
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "3000"), 3000),
        log_level=_log_level(os.getenv("LOG_LEVEL")),
    )
