"""
Ledger construction.

Two passes over the stripped lines:

1. Collect participants from person headers. A header whose name collides
   (case-insensitively) with an earlier one is not a new participant.
2. Fold over the lines carrying the current payer. A header selects its
   participant (a duplicate header selects the one it collides with), a
   blank line forgets the payer, and a money line is attributed to the
   current payer. Money lines with no payer are ignored.

build_ledger does not validate. Use splitwiser.parse for the validating
entry point.
"""

from typing import Optional

import structlog

from splitwiser.config import ParserSettings, get_settings
from splitwiser.models.ledger import Ledger, Participant
from splitwiser.parsing.lines import is_person_header, parse_transaction
from splitwiser.parsing.names import parse_person_name


logger = structlog.get_logger(__name__)


def split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


def collect_participants(lines: list[str]) -> tuple[dict[str, Participant], dict[str, str]]:
    """
    Collect participants in declaration order.

    Returns (participants, aliases). aliases maps every header line,
    duplicates included, to the key of the participant it declares.
    """
    participants: dict[str, Participant] = {}
    aliases: dict[str, str] = {}
    seen: dict[str, str] = {}

    for line in lines:
        if not is_person_header(line):
            continue
        participant = parse_person_name(line)
        folded = participant.base_name.casefold()
        if folded in seen:
            aliases.setdefault(line, seen[folded])
            continue
        seen[folded] = participant.key
        participants[participant.key] = participant
        aliases[line] = participant.key

    return participants, aliases


def build_ledger(text: str, settings: Optional[ParserSettings] = None) -> Ledger:
    """Parse text into a Ledger, without validation."""
    settings = settings or get_settings().parser
    lines = split_lines(text)
    participants, aliases = collect_participants(lines)

    transactions = []
    current_payer: Optional[str] = None

    for line in lines:
        if not line:
            if settings.reset_payer_on_blank_line:
                current_payer = None
            continue

        if is_person_header(line):
            current_payer = aliases[line]
            continue

        if current_payer is None:
            continue

        transaction = parse_transaction(line, current_payer, participants)
        if transaction is not None:
            transactions.append(transaction)

    ledger = Ledger(participants=participants, transactions=tuple(transactions))

    logger.debug(
        "ledger_built",
        participant_count=len(participants),
        transaction_count=len(transactions),
    )

    return ledger
