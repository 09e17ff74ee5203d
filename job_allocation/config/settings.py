"""
Application settings using Pydantic BaseSettings.

Values come from the environment or a ``.env`` file; names are case sensitive.
"""

from typing import List, Optional, Union

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENVIRONMENTS = ("development", "staging", "production", "test")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Settings for the allocation service."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    # Service
    APP_NAME: str = "Job Allocation Engine"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # HTTP
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"
    CORS_ORIGINS: Union[str, List[str]] = Field(default="*", validate_default=True)

    # Database; DATABASE_URL wins over the POSTGRES_* parts
    POSTGRES_USER: str = "allocation_user"
    POSTGRES_PASSWORD: str = "allocation_pass"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "job_allocation"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 10
    DATABASE_MAX_OVERFLOW: int = 20
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_POOL_RECYCLE: int = 3600

    # Allocation unit of work
    ALLOCATION_TRANSACTION_MAX_WAIT_SECONDS: float = 10.0
    ALLOCATION_TRANSACTION_TIMEOUT_SECONDS: float = 30.0
    ALLOCATION_TRANSIENT_RETRIES: int = 1

    # Page sizes
    JOB_ALLOCATION_PAGE_SIZE: int = 10
    CONSULTANT_PAGE_SIZE: int = 25

    # Consultant notifications
    NOTIFICATION_SERVICE_URL: Optional[str] = None
    NOTIFICATION_SERVICE_TOKEN: Optional[str] = None
    NOTIFICATION_TIMEOUT_SECONDS: float = 5.0

    ENABLE_METRICS: bool = True

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of: {', '.join(ENVIRONMENTS)}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        if v.upper() not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {list(LOG_LEVELS)}")
        return v.upper()

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def split_cors_origins(cls, v: Union[str, List[str], None]) -> List[str]:
        if isinstance(v, list):
            return v
        if not v or v == "*":
            return ["*"]
        return [origin.strip() for origin in v.split(",") if origin.strip()]

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def assemble_database_url(cls, v: Optional[str], info: ValidationInfo) -> str:
        if v:
            return v
        parts = info.data
        return (
            f"postgresql+asyncpg://{parts['POSTGRES_USER']}:{parts['POSTGRES_PASSWORD']}"
            f"@{parts['POSTGRES_SERVER']}:{parts['POSTGRES_PORT']}/{parts['POSTGRES_DB']}"
        )

    @field_validator("ALLOCATION_TRANSIENT_RETRIES")
    @classmethod
    def validate_transient_retries(cls, v: int) -> int:
        # The executor retries a transient failure once at most
        if v not in (0, 1):
            raise ValueError("ALLOCATION_TRANSIENT_RETRIES must be 0 or 1")
        return v

    @field_validator(
        "ALLOCATION_TRANSACTION_MAX_WAIT_SECONDS",
        "ALLOCATION_TRANSACTION_TIMEOUT_SECONDS",
        "NOTIFICATION_TIMEOUT_SECONDS",
    )
    @classmethod
    def validate_positive_budget(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Time budgets must be positive")
        return v


# Global settings instance
settings = Settings()
