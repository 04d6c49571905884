"""
Plain-text reports.

Three things people do with a ledger besides looking at the numbers:

- format_ledger_text: rewrite the input in a canonical layout (one block
  per person, amounts right-aligned, references spelled out in full).
- build_summary: a message to paste into a group chat, with expenses,
  costs per person and who owes whom.
- record_settlement: mark a suggested payment as done by adding the line
  '<amount> > <recipient>' to the payer's block of the input text.

All of them are pure functions of their arguments.
"""

import re
from typing import Callable, Optional

from splitwiser.calculation.allocator import FairShareAllocator
from splitwiser.calculation.settlement import SettlementEngine
from splitwiser.i18n import format_amount, localize
from splitwiser.models.ledger import (
    Allocation,
    Expense,
    Ledger,
    PercentageFee,
    RecordedSettlement,
    SettlementSuggestion,
    Transaction,
)
from splitwiser.parsing.names import clean_for_settlement, format_with_parts, parse_person_name
from splitwiser.parsing.numbers import AMOUNT_PATTERN
from splitwiser.parsing.references import resolve_reference


_AMOUNT_LINE = re.compile(rf"^-?{AMOUNT_PATTERN}")

# Alignment width used when there is nothing to align against
MIN_AMOUNT_WIDTH = 8


def total_costs_cents(ledger: Ledger, allocation: Optional[Allocation] = None) -> int:
    """Base expenses plus every fee actually charged."""
    allocation = allocation or FairShareAllocator().allocate(ledger)
    return allocation.total_cents


def _format_percentage(percentage: float) -> str:
    return f"{percentage:g}%"


def _transaction_amount(transaction: Transaction, locale: Optional[str]) -> str:
    if isinstance(transaction, PercentageFee):
        return _format_percentage(transaction.percentage)
    return format_amount(transaction.amount_cents, locale)


# (participant key, drop exclusion marker) -> name to write
NameFor = Callable[[str, bool], str]


def display_names(ledger: Ledger) -> NameFor:
    """Names for people to read; they may be ambiguous as references."""
    def name_for(key: str, plain: bool = False) -> str:
        name = ledger.display_name(key)
        return clean_for_settlement(name) if plain else name
    return name_for


def reference_names(ledger: Ledger, headers: Optional[dict[str, str]] = None) -> NameFor:
    """
    Names that parse back to the participant they stand for.

    The display name is used when it resolves to that participant alone
    among the headers of the text being written; otherwise the header
    itself is written. headers maps keys to those header lines and
    defaults to the keys, i.e. to the text the ledger was parsed from.
    """
    headers = headers or {key: key for key in ledger.keys}
    written = {header: parse_person_name(header) for header in headers.values()}
    written_keys = list(written)
    readable = display_names(ledger)

    def name_for(key: str, plain: bool = False) -> str:
        name = readable(key, plain)
        header = headers.get(key)
        if header is None:
            return name
        if resolve_reference(name, written_keys, written).match == header:
            return name
        return header

    return name_for


def _transaction_description(transaction: Transaction, name_for: NameFor) -> str:
    if isinstance(transaction, RecordedSettlement):
        return f"> {name_for(transaction.settle_to, True)}"

    description = transaction.description
    if transaction.shared_with:
        names = ", ".join(name_for(key, False) for key in transaction.shared_with)
        description = f"{description} - {names}" if description else f"- {names}"
    return description


def _amount_width(transactions: list[Transaction], locale: Optional[str]) -> int:
    return max((len(_transaction_amount(t, locale)) for t in transactions), default=0)


def format_transaction_line(
    transaction: Transaction,
    ledger: Ledger,
    width: int,
    locale: Optional[str] = None,
    name_for: Optional[NameFor] = None,
) -> str:
    amount = _transaction_amount(transaction, locale).rjust(width)
    description = _transaction_description(transaction, name_for or display_names(ledger))
    return f"{amount} {description}" if description else amount


def format_ledger_text(ledger: Ledger, locale: Optional[str] = None) -> str:
    """
    Canonical re-rendering of the input text.

    Every name written on a money line resolves to the same participant
    when the result is parsed again.
    """
    width = _amount_width(list(ledger.transactions), locale)
    headers = {
        key: format_with_parts(participant, locale)
        for key, participant in ledger.participants.items()
    }
    name_for = reference_names(ledger, headers)
    lines = []

    for key in ledger.participants:
        lines.append(headers[key])
        transactions = ledger.paid_by(key)
        for transaction in transactions:
            lines.append(format_transaction_line(transaction, ledger, width, locale, name_for))
        if transactions:
            lines.append("")

    return "\n".join(lines).strip()


def _heading(key: str, locale: Optional[str]) -> str:
    return f"*{localize(key, locale=locale).upper()}*"


def _expenses_block(ledger: Ledger, locale: Optional[str]) -> str:
    width = _amount_width(ledger.expenses, locale) or MIN_AMOUNT_WIDTH
    lines = []

    for key, participant in ledger.participants.items():
        expenses = [t for t in ledger.paid_by(key) if isinstance(t, Expense)]
        if not expenses:
            continue
        lines.append(format_with_parts(participant, locale))
        lines.extend(format_transaction_line(e, ledger, width, locale) for e in expenses)
        lines.append("")

    body = "\n".join(lines).strip()
    return f"{_heading('EXPENSES', locale)}\n{body}\n" if body else ""


def _costs_block(
    ledger: Ledger,
    allocation: Allocation,
    total_cents: int,
    locale: Optional[str],
) -> str:
    header = _heading("COSTS", locale)
    if total_cents:
        header = f"{header} = {format_amount(total_cents, locale)}"

    lines = [
        f"{format_with_parts(p, locale)} = "
        f"{format_amount(allocation.owed_cents.get(key, 0), locale)}"
        for key, p in ledger.participants.items()
        if not p.is_excluded
    ]
    return "\n" + header + "\n" + "\n".join(lines) + "\n"


def _settlements_block(
    ledger: Ledger,
    suggestions: list[SettlementSuggestion],
    total_cents: int,
    locale: Optional[str],
) -> str:
    if total_cents and not suggestions:
        header = _heading("ALL_SETTLED", locale)
    else:
        header = _heading("SETTLEMENTS", locale)

    lines = []
    if not total_cents:
        lines.append(localize("NOTHING_TO_SETTLE", locale=locale))
    else:
        for suggestion in suggestions:
            lines.append(localize("OWES_TEMPLATE", {
                "fromName": clean_for_settlement(ledger.display_name(suggestion.from_key)),
                "amount": format_amount(suggestion.amount_cents, locale),
                "toName": clean_for_settlement(ledger.display_name(suggestion.to_key)),
            }, locale))

    for settlement in ledger.recorded_settlements:
        lines.append(localize("PAID_TEMPLATE", {
            "fromName": clean_for_settlement(ledger.display_name(settlement.paid_by)),
            "amount": format_amount(settlement.amount_cents, locale),
            "toName": clean_for_settlement(ledger.display_name(settlement.settle_to)),
        }, locale))

    return "\n" + header + "\n" + "".join(line + "\n" for line in lines)


def build_summary(
    ledger: Ledger,
    locale: Optional[str] = None,
    allocation: Optional[Allocation] = None,
    suggestions: Optional[list[SettlementSuggestion]] = None,
) -> str:
    """
    The shareable summary.

    allocation and suggestions are computed when not given.
    """
    allocation = allocation or FairShareAllocator().allocate(ledger)
    if suggestions is None:
        suggestions = SettlementEngine().settle(ledger, allocation)
    total_cents = allocation.total_cents

    return (
        _expenses_block(ledger, locale)
        + _costs_block(ledger, allocation, total_cents, locale)
        + _settlements_block(ledger, suggestions, total_cents, locale)
    )


def _insert_position(lines: list[str], header_index: int) -> int:
    """
    Where the payer's block ends: the first blank line after the header,
    else just before the next person header, else the end of the text.
    """
    for i in range(header_index + 1, len(lines)):
        line = lines[i].strip()
        if not line:
            return i
        if not _AMOUNT_LINE.match(line):
            return i
    return len(lines)


def record_settlement(
    text: str,
    suggestion: SettlementSuggestion,
    ledger: Ledger,
    locale: Optional[str] = None,
) -> str:
    """
    Add '<amount> > <recipient>' to the payer's block.

    Returns the text unchanged when the payer's header is not in it.
    """
    lines = text.split("\n")
    header_index = next(
        (i for i, line in enumerate(lines) if line.strip() == suggestion.from_key),
        None,
    )
    if header_index is None:
        return text

    recipient = reference_names(ledger)(suggestion.to_key, True)
    settlement_line = f"{format_amount(suggestion.amount_cents, locale)} > {recipient}"

    lines.insert(_insert_position(lines, header_index), settlement_line)
    return "\n".join(lines)
