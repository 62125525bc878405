"""
Configuration management for the booking calendar.
"""

from decimal import Decimal
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateTierSetting(BaseModel):
    """One row of the package rate table as read from the environment."""

    min_hours: Decimal = Field(..., ge=0)
    rate: Decimal = Field(..., ge=0)


DEFAULT_PACKAGE_RATE_TIERS = [
    RateTierSetting(min_hours=Decimal("40"), rate=Decimal("160")),
    RateTierSetting(min_hours=Decimal("20"), rate=Decimal("230")),
    RateTierSetting(min_hours=Decimal("10"), rate=Decimal("260")),
    RateTierSetting(min_hours=Decimal("0"), rate=Decimal("350")),
]


class CalendarSettings(BaseSettings):
    """Configuration settings for the booking calendar."""

    # Calendar grid
    calendar_start_hour: int = Field(default=9, alias="CALENDAR_START_HOUR")
    calendar_end_hour: int = Field(default=19, alias="CALENDAR_END_HOUR")
    buffer_hours: int = Field(default=1, alias="BUFFER_HOURS")
    calendar_timezone: str = Field(default="UTC", alias="CALENDAR_TIMEZONE")

    # Pricing
    package_rate_tiers: List[RateTierSetting] = Field(
        default=DEFAULT_PACKAGE_RATE_TIERS, alias="PACKAGE_RATE_TIERS"
    )

    # Display placeholders
    unknown_client_label: str = Field(
        default="Unknown client", alias="UNKNOWN_CLIENT_LABEL"
    )
    unknown_project_label: str = Field(
        default="Unknown project", alias="UNKNOWN_PROJECT_LABEL"
    )
    service_prefix: str = Field(default="Session for", alias="SERVICE_PREFIX")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
    )

    @field_validator("calendar_start_hour", "calendar_end_hour")
    @classmethod
    def validate_hour(cls, v):
        """Ensure calendar bounds are valid hours of the day."""
        if not 0 <= v <= 24:
            raise ValueError(f"Calendar hour must be between 0 and 24, got {v}")
        return v

    @field_validator("buffer_hours")
    @classmethod
    def validate_buffer_hours(cls, v):
        """Ensure buffer width is not negative."""
        if v < 0:
            raise ValueError("Buffer hours cannot be negative")
        return v

    @field_validator("calendar_timezone")
    @classmethod
    def validate_calendar_timezone(cls, v):
        """Ensure the calendar zone is a known IANA time zone."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator("package_rate_tiers")
    @classmethod
    def validate_rate_tiers(cls, v):
        """Ensure the rate table covers zero hours and sort it descending."""
        if not v:
            raise ValueError("At least one package rate tier is required")
        if not any(tier.min_hours == 0 for tier in v):
            raise ValueError("Package rate tiers must include a 0-hour tier")
        return sorted(v, key=lambda tier: tier.min_hours, reverse=True)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @model_validator(mode="after")
    def validate_calendar_bounds(self) -> "CalendarSettings":
        """Ensure the calendar day has at least one slot."""
        if self.calendar_end_hour <= self.calendar_start_hour:
            raise ValueError(
                f"CALENDAR_END_HOUR ({self.calendar_end_hour}) must be after "
                f"CALENDAR_START_HOUR ({self.calendar_start_hour})"
            )
        return self

    @property
    def calendar_tzinfo(self) -> ZoneInfo:
        """Time zone the calendar grid and month boundaries are drawn in."""
        return ZoneInfo(self.calendar_timezone)


def load_config(env_file: Optional[str] = None) -> CalendarSettings:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return CalendarSettings()


# Global configuration instance
_config: Optional[CalendarSettings] = None


def get_config() -> CalendarSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> CalendarSettings:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
