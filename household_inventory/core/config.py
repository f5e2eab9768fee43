"""
Application configuration.
"""

import os
from typing import Any, Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    # Core Settings
    PROJECT_NAME: str = "Household Inventory"
    PROJECT_DESCRIPTION: str = "Household inventory tracking with restock notifications"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    SECRET_KEY: str

    # Auth Settings
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    SESSION_COOKIE_NAME: str = "session"

    # API Settings
    API_PREFIX: str = "/api"
    API_V1_STR: str = "/api/v1"
    CORS_ORIGINS_STR: str = "*"
    # Prefix of the web UI when served behind a reverse proxy sub-path
    BASE_PATH: str = ""

    # Database Settings
    POSTGRES_SERVER: str
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    POSTGRES_PORT: str = "5432"
    DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    @field_validator("DATABASE_URI", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> Any:
        if isinstance(v, str):
            return v

        data = info.data
        if not data:
            raise ValueError("Missing data for DATABASE_URI")

        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=data.get("POSTGRES_USER"),
                password=data.get("POSTGRES_PASSWORD"),
                host=data.get("POSTGRES_SERVER"),
                port=int(data.get("POSTGRES_PORT", 5432)),
                path=f"{data.get('POSTGRES_DB') or ''}",
            )
        )

    # Inventory Settings
    DEFAULT_RESTOCK_THRESHOLD: int = 1
    DEFAULT_CATEGORY_COLOR: str = "#CCCCCC"

    # Sentry Settings
    SENTRY_DSN: Optional[str] = None
    SENTRY_TRACES_SAMPLE_RATE: float = 0.1

    # Prometheus Metrics
    ENABLE_METRICS: bool = True

    # Logging Settings
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # Tracing Settings
    ENABLE_TRACING: bool = False
    OTLP_ENDPOINT: Optional[str] = None

    @field_validator("ENABLE_METRICS", "ENABLE_TRACING", "JSON_LOGS", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> bool:
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            return v.lower() not in ("false", "0", "no", "")
        return bool(v)


# Provide required parameters as environment variables or hardcode for development
settings = Settings(
    SECRET_KEY=os.getenv("SECRET_KEY", "development_secret_key"),
    POSTGRES_SERVER=os.getenv("POSTGRES_SERVER", "localhost"),
    POSTGRES_USER=os.getenv("POSTGRES_USER", "postgres"),
    POSTGRES_PASSWORD=os.getenv("POSTGRES_PASSWORD", "postgres"),
    POSTGRES_DB=os.getenv("POSTGRES_DB", "household_inventory"),
)
