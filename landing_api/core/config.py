# landing_api/core/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    APP_NAME: str = "Landing Leads API"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Storage (single sqlite file, WAL)
    DB_PATH: str = Field(default="data.db")

    # CORS: exact origin accepted for browser calls, unset = any
    ALLOWED_ORIGIN: str | None = None

    # Admin shared secret (X-API-Key); unset = admin routes fail closed
    API_KEY: str | None = None

    # Rate limiting
    RATE_LIMIT_WINDOW_SECONDS: int = 60
    RATE_LIMIT_MAX: int = 60
    TRUST_PROXY: bool = True  # one proxy in front; it appends the last X-Forwarded-For entry

    MAX_BODY_BYTES: int = 100 * 1024

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )


@lru_cache
def load_settings() -> Settings:
    return Settings()
