"""
Configuration Management for Splitwiser

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here. The calculation core never reads
the environment directly; it asks for a settings object and falls back to
get_settings() when none is given.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParserSettings(BaseSettings):
    """Text parsing behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITWISER_PARSER_",
        extra="ignore"
    )

    reset_payer_on_blank_line: bool = Field(
        default=True,
        description=(
            "Forget the current payer on a blank line, so amounts after a "
            "blank line need a new person header"
        )
    )


class SettlementSettings(BaseSettings):
    """Settlement matching configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITWISER_SETTLEMENT_",
        extra="ignore"
    )

    balance_tolerance_cents: int = Field(
        default=1,
        ge=0,
        le=100,
        description="Balances within this many cents count as settled"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    locale: str = Field(
        default="en-US",
        description="Locale for messages and amount formatting"
    )

    @field_validator('locale')
    @classmethod
    def normalize_locale(cls, v: str) -> str:
        """Accept en_US style tags as well as en-US."""
        return v.strip().replace("_", "-")


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def parser(self) -> ParserSettings:
        return ParserSettings()

    @property
    def settlement(self) -> SettlementSettings:
        return SettlementSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an extra
    "<name>_error" entry for every section that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("parser", "settlement", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
