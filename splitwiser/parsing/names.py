"""
Person header parsing.

A header line such as "Ana 2", "Cris (3)" or "Restaurant!" declares a
participant. The first integer is the share weight ("parts"), an "!"
anywhere marks the participant as excluded from default splits, and the
remaining letters form the name.
"""

import re
from typing import Optional

from splitwiser.i18n import localize
from splitwiser.models.ledger import Participant


EXCLUSION_MARKER = "!"

_FIRST_INTEGER = re.compile(r"\d+")
_NON_NAME = re.compile(r"[^\w\s]|[\d_]")
_WHITESPACE = re.compile(r"\s+")


def parse_person_name(line: str) -> Participant:
    key = line.strip()
    is_excluded = EXCLUSION_MARKER in key
    cleaned = key.replace(EXCLUSION_MARKER, "")

    weight_match = _FIRST_INTEGER.search(cleaned)
    share_weight = max(int(weight_match.group()), 1) if weight_match else 1

    base_name = _WHITESPACE.sub(" ", _NON_NAME.sub("", cleaned)).strip()
    if not base_name:
        # Names made only of symbols ("#1") keep their symbols
        base_name = _FIRST_INTEGER.sub("", cleaned).strip()

    display_name = base_name + EXCLUSION_MARKER if is_excluded else base_name

    return Participant(
        key=key,
        display_name=display_name,
        base_name=base_name,
        share_weight=share_weight,
        is_excluded=is_excluded,
    )


def format_with_parts(participant: Participant, locale: Optional[str] = None) -> str:
    """Render 'Name (N)' for weighted participants, 'Name' otherwise."""
    if participant.share_weight > 1:
        return localize(
            "PERSON_WITH_PARTS_TEMPLATE",
            {"displayName": participant.display_name, "parts": participant.share_weight},
            locale,
        )
    return participant.display_name


def clean_for_settlement(display_name: str) -> str:
    """Drop the trailing exclusion marker; settlement lines name people plainly."""
    if display_name.endswith(EXCLUSION_MARKER):
        return display_name[:-len(EXCLUSION_MARKER)]
    return display_name
