"""
Line classification and transaction parsing.

Every non-blank line is one statement. Precedence, first match wins:

    10% Service fee - A, D     percentage fee
    50 > Ana                   settlement (target must resolve uniquely)
    25.50 Lunch - Ana, Cris    expense

Anything else is a person header when it starts with a letter, and is
ignored otherwise. Malformed lines never raise; they just produce no
transaction.
"""

import re
from typing import Mapping, Optional

from splitwiser.models.ledger import (
    Expense,
    Participant,
    PercentageFee,
    RecordedSettlement,
    Transaction,
)
from splitwiser.parsing.numbers import AMOUNT_PATTERN, parse_number, to_cents
from splitwiser.parsing.references import find_participant


PERCENTAGE_LINE = re.compile(r"^(\d+(?:[.,]\d+)?)\s*%\s*(.*)$")
SETTLEMENT_LINE = re.compile(rf"^({AMOUNT_PATTERN})\s*>\s*(.+)$")
EXPENSE_LINE = re.compile(rf"^({AMOUNT_PATTERN})(.*)$")

_STARTS_WITH_AMOUNT = re.compile(rf"^{AMOUNT_PATTERN}")
_STARTS_WITH_LETTER = re.compile(r"^[^\W\d_]")
# A dash surrounded by whitespace (or the string edges); "Jean-Luc" is not one
_STANDALONE_DASH = re.compile(r"(?<!\S)-(?!\S)")


def is_person_header(line: str) -> bool:
    line = line.strip()
    return bool(
        line
        and not _STARTS_WITH_AMOUNT.match(line)
        and _STARTS_WITH_LETTER.match(line)
    )


def split_participants(rest: str) -> tuple[str, str]:
    """
    Split '<description> - <refs>' on its last standalone dash.

    Returns (description, references); references is '' when the line
    names nobody, including a trailing dash with nothing after it.
    """
    rest = rest.strip()
    dashes = list(_STANDALONE_DASH.finditer(rest))
    if not dashes:
        return rest, ""
    last = dashes[-1]
    return rest[:last.start()].strip(), rest[last.end():].strip()


def split_references(references: str) -> list[str]:
    """Comma-separated references, blanks dropped."""
    return [ref.strip() for ref in references.split(",") if ref.strip()]


def resolve_participants(
    references: str,
    participants: Mapping[str, Participant],
) -> tuple[str, ...]:
    """
    Resolve a reference list to participant keys.

    Unresolved and ambiguous references are dropped; the validator is
    the place that reports them.
    """
    keys = list(participants)
    resolved = []
    for ref in split_references(references):
        key = find_participant(ref, keys, participants)
        if key is not None:
            resolved.append(key)
    return tuple(dict.fromkeys(resolved))


def settlement_target(line: str) -> Optional[str]:
    """The '<ref>' of a settlement-shaped line, or None."""
    match = SETTLEMENT_LINE.match(line.strip())
    return match.group(2).strip() if match else None


def participant_references(line: str) -> list[str]:
    """References listed after the dash of a fee or expense line."""
    line = line.strip()
    match = PERCENTAGE_LINE.match(line) or EXPENSE_LINE.match(line)
    if not match:
        return []
    _, references = split_participants(match.group(2))
    return split_references(references)


def parse_transaction(
    line: str,
    paid_by: str,
    participants: Mapping[str, Participant],
) -> Optional[Transaction]:
    """Parse one line paid by paid_by, or return None if it carries no money."""
    line = line.strip()

    match = PERCENTAGE_LINE.match(line)
    if match:
        percentage = parse_number(match.group(1))
        if percentage > 0:
            description, references = split_participants(match.group(2))
            return PercentageFee(
                percentage=percentage,
                description=description,
                shared_with=resolve_participants(references, participants),
                paid_by=paid_by,
            )

    match = SETTLEMENT_LINE.match(line)
    if match:
        amount_cents = to_cents(parse_number(match.group(1)))
        settle_to = find_participant(match.group(2), list(participants), participants)
        if settle_to is not None and amount_cents is not None:
            return RecordedSettlement(
                amount_cents=amount_cents,
                paid_by=paid_by,
                settle_to=settle_to,
            )

    match = EXPENSE_LINE.match(line)
    if match:
        amount_cents = to_cents(parse_number(match.group(1)))
        if amount_cents is not None:
            description, references = split_participants(match.group(2))
            return Expense(
                amount_cents=amount_cents,
                description=description,
                shared_with=resolve_participants(references, participants),
                paid_by=paid_by,
            )

    return None
