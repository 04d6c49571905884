"""Configuration package."""

from splitwiser.config.settings import (
    AppSettings,
    ParserSettings,
    SettlementSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "ParserSettings",
    "SettlementSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
