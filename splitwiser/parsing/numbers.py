"""
Amount parsing.

People type amounts the way their locale writes them: 1,234.56 and
1.234,56 are the same number, and so are 123.45 and 123,45. The rules:

- If only one kind of separator appears, the final group decides: two
  digits or fewer means a decimal point, more means thousands separators.
- If both appear, the later one is the decimal point when at most two
  digits follow it.
- Otherwise the last separator is a decimal point when at most two digits
  follow it, and all separators are dropped when more do.

parse_number never raises. Anything it cannot read becomes NaN, and NaN
amounts never reach the ledger (to_cents returns None for them).
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional


AMOUNT_PATTERN = r"\d+(?:[.,]\d+)*"

_INTEGER = re.compile(r"^\d+$")
_NOT_NUMERIC = re.compile(r"[^\d.,]")
_SEPARATOR = re.compile(r"[.,]")


def _join_decimal(whole: str, fraction: str) -> float:
    return float(f"{_SEPARATOR.sub('', whole) or '0'}.{fraction}")


def _single_separator(cleaned: str, separator: str) -> float:
    groups = cleaned.split(separator)
    last = groups[-1]
    if len(groups) >= 2 and len(last) <= 2:
        return _join_decimal("".join(groups[:-1]), last)
    return float(cleaned.replace(separator, ""))


def parse_number(token: str) -> float:
    """Parse a locale-ambiguous amount such as '1.234,56' into a float."""
    token = token.strip()
    if _INTEGER.match(token):
        return float(token)

    cleaned = _NOT_NUMERIC.sub("", token)
    if not any(ch.isdigit() for ch in cleaned):
        return math.nan

    last_dot = cleaned.rfind(".")
    last_comma = cleaned.rfind(",")

    try:
        if last_dot == -1 and last_comma == -1:
            return float(cleaned)
        if last_comma == -1:
            return _single_separator(cleaned, ".")
        if last_dot == -1:
            return _single_separator(cleaned, ",")

        decimal_at = max(last_dot, last_comma)
        fraction = cleaned[decimal_at + 1:]
        if len(fraction) <= 2:
            return _join_decimal(cleaned[:decimal_at], fraction)

        # Both kinds present and more than two digits after the last one:
        # nothing can be a decimal point.
        return float(_SEPARATOR.sub("", cleaned))
    except ValueError:
        return math.nan


def to_cents(value: float) -> Optional[int]:
    """
    Convert a parsed amount to integer cents, rounding half up.

    Returns None for NaN, infinite or non-positive amounts, which the
    parser treats as "no transaction".
    """
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    try:
        cents = (Decimal(str(value)) * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None
    if cents <= 0:
        return None
    return int(cents)
