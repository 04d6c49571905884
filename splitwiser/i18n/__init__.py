"""Localisation package."""

from splitwiser.i18n.strings import (
    DEFAULT_LOCALE,
    STRINGS,
    format_amount,
    format_template,
    localize,
    resolve_locale,
)

__all__ = [
    "DEFAULT_LOCALE",
    "STRINGS",
    "format_amount",
    "format_template",
    "localize",
    "resolve_locale",
]
