"""
Application settings using Pydantic BaseSettings.
"""

from typing import List, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Field Service Analytics"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    # API Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api"
    CORS_ORIGINS: Union[str, List[str]] = "*"

    # Database
    POSTGRES_USER: str = "analytics_user"
    POSTGRES_PASSWORD: str = "analytics_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_DB: str = "field_service"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_ECHO: bool = False
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Celery / Redis
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_TIME_LIMIT: int = 600  # 10 minutes
    CELERY_TASK_SOFT_TIME_LIMIT: int = 480  # 8 minutes

    # Monitoring
    ENABLE_METRICS: bool = True

    # Reporting
    REPORTING_TIMEZONE: str = "UTC"
    DEFAULT_WINDOW_DAYS: int = 30
    DEFAULT_PAGE_LIMIT: int = 10
    CUSTOMER_PAGE_LIMIT: int = 20
    MAX_PAGE_LIMIT: int = 10000
    EXPORT_LIMIT_THRESHOLD: int = 100

    # Precomputation
    ENABLE_PRECOMPUTATION: bool = True
    SCHEDULER_BACKEND: str = "embedded"
    PRECOMPUTE_DAILY_HOUR: int = 1
    PRECOMPUTE_DAILY_MINUTE: int = 0
    PRECOMPUTE_WEEKLY_WEEKDAY: int = 0  # Monday
    PRECOMPUTE_WEEKLY_HOUR: int = 2
    PRECOMPUTE_WEEKLY_MINUTE: int = 0
    SNAPSHOT_JOIN_LOCATIONS: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str):
            if v == "*":
                return ["*"]
            return [i.strip() for i in v.split(",")]
        elif isinstance(v, list):
            return v
        return ["*"]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        if isinstance(v, str) and v:
            return v
        # Build from individual components if DATABASE_URL is not provided
        user = info.data.get("POSTGRES_USER", "analytics_user")
        password = info.data.get("POSTGRES_PASSWORD", "analytics_pass")
        host = info.data.get("POSTGRES_SERVER", "localhost")
        db = info.data.get("POSTGRES_DB", "field_service")
        return f"postgresql+asyncpg://{user}:{password}@{host}:5432/{db}"

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ["development", "staging", "production", "test"]:
            raise ValueError(
                "Environment must be one of: development, staging, production, test"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("REPORTING_TIMEZONE")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown reporting timezone: {v}")
        return v

    @field_validator("SCHEDULER_BACKEND")
    @classmethod
    def validate_scheduler_backend(cls, v: str) -> str:
        if v not in ["embedded", "celery"]:
            raise ValueError("Scheduler backend must be one of: embedded, celery")
        return v

    @field_validator("PRECOMPUTE_WEEKLY_WEEKDAY")
    @classmethod
    def validate_weekday(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError("Weekday must be between 0 (Monday) and 6 (Sunday)")
        return v

    @property
    def reporting_tz(self) -> ZoneInfo:
        return ZoneInfo(self.REPORTING_TIMEZONE)

    model_config = {"env_file": ".env", "case_sensitive": True, "extra": "ignore"}


# Global settings instance
settings = Settings()
