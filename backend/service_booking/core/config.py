"""Application configuration via pydantic settings."""

from functools import lru_cache
from pathlib import Path

from typing import Annotated, Any

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Typed application configuration."""

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "Vehicle Service Booking API"
    api_v1_prefix: str = "/api/v1"

    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(default=None, alias="SYNC_DATABASE_URL")
    database_pool_timeout: int = Field(30, alias="DATABASE_POOL_TIMEOUT")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    booking_offer_count: int = Field(3, ge=1, alias="BOOKING_OFFER_COUNT")
    availability_horizon_days: int = Field(
        180, ge=1, alias="AVAILABILITY_HORIZON_DAYS"
    )
    availability_fallback_to_tomorrow: bool = Field(
        default=False, alias="AVAILABILITY_FALLBACK_TO_TOMORROW"
    )
    max_consecutive_reschedules: int = Field(
        3, ge=1, alias="MAX_CONSECUTIVE_RESCHEDULES"
    )
    reschedule_history_window: int = Field(3, ge=1, alias="RESCHEDULE_HISTORY_WINDOW")

    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
        ],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=False, alias="CORS_ALLOW_CREDENTIALS")

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[3] / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()  # type: ignore[call-arg]
