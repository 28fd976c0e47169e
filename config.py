"""Application configuration."""
from functools import lru_cache

import pytz
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Database
    database_url: str = "sqlite:///./yard_billing.db"

    # Yard
    yard_timezone: str = "UTC"

    # Billing Configuration
    billing_max_records: int = 2000

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.app_env == "testing"

    def validate_required_settings(self) -> list[str]:
        """
        Validate that all required settings are configured.

        Returns:
            List of missing or invalid settings
        """
        errors = []

        if not self.database_url:
            errors.append("DATABASE_URL is required")

        if self.yard_timezone not in pytz.all_timezones_set:
            errors.append(f"YARD_TIMEZONE is not a known timezone: {self.yard_timezone}")

        if self.billing_max_records <= 0:
            errors.append("billing_max_records must be positive")

        if self.is_production and "*" in self.cors_origins:
            errors.append("CORS_ORIGINS must be restricted in production")

        return errors


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
