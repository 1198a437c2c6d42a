from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables or a `.env` file.

    Every field has a development default so the server and the test-suite can
    start without any environment; production deployments must at least override
    `SECRET_KEY` and `DATABASE_URL`.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "sqlite+aiosqlite:///./social.db"
    """SQLAlchemy async URL of the relational database."""

    STORAGE_BACKEND: Literal["sql", "memory"] = "sql"
    """`sql` persists through SQLAlchemy, `memory` keeps everything in process."""

    SECRET_KEY: str = "change-me"
    """Secret used to sign bearer tokens."""

    ALGORITHM: str = "HS256"
    """JWT signing algorithm."""

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    """Lifetime of issued bearer tokens."""

    CORS_ORIGINS: list[str] = ["*"]
    """Origins allowed by the HTTP CORS middleware and the Socket.IO server."""

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"
    """Minimum level of the loguru stderr sink."""
