"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - get_settings() is cached (lru_cache) — single instance per process
    - business_timezone is a valid IANA zone; all day-boundary math uses it

Design Decisions:
    - Defaults provided for all non-secret settings: works out-of-the-box locally
    - Premium bounds are settings, defaults 50 / 999
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from canteen.core.domain_types import DEFAULT_BUSINESS_TIMEZONE
from canteen.core.quota_policy import (
    QuotaLimits, PREMIUM_MAX_QUANTITY, PREMIUM_DAILY_CAP,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "postgresql+asyncpg://canteen:canteen@db:5432/canteen"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql://", 1)
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    auto_create_schema: bool = False

    # Business rules
    business_timezone: str = DEFAULT_BUSINESS_TIMEZONE
    premium_max_quantity: int = PREMIUM_MAX_QUANTITY
    premium_daily_cap: int = PREMIUM_DAILY_CAP

    @field_validator("business_timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone: {v}") from e
        return v

    # Admin sessions
    admin_password: str = "change-me"
    session_ttl_seconds: int = 60 * 60 * 24
    environment: str = "development"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def quota_limits(self) -> QuotaLimits:
        return QuotaLimits(
            premium_max_quantity=self.premium_max_quantity,
            premium_daily_cap=self.premium_daily_cap,
        )

    @property
    def secure_cookies(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
