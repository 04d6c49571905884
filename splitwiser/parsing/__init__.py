"""Text parsing package: amounts, names, references, lines and ledgers."""

from splitwiser.parsing.builder import build_ledger, collect_participants, split_lines
from splitwiser.parsing.lines import (
    is_person_header,
    parse_transaction,
    participant_references,
    resolve_participants,
    settlement_target,
    split_participants,
)
from splitwiser.parsing.names import (
    EXCLUSION_MARKER,
    clean_for_settlement,
    format_with_parts,
    parse_person_name,
)
from splitwiser.parsing.numbers import AMOUNT_PATTERN, parse_number, to_cents
from splitwiser.parsing.references import find_participant, resolve_reference

__all__ = [
    "AMOUNT_PATTERN",
    "EXCLUSION_MARKER",
    "build_ledger",
    "clean_for_settlement",
    "collect_participants",
    "find_participant",
    "format_with_parts",
    "is_person_header",
    "parse_number",
    "parse_person_name",
    "parse_transaction",
    "participant_references",
    "resolve_participants",
    "resolve_reference",
    "settlement_target",
    "split_lines",
    "split_participants",
    "to_cents",
]
