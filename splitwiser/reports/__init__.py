"""Plain-text reports: canonical input, shareable summary, recorded payments."""

from splitwiser.reports.text import (
    build_summary,
    format_ledger_text,
    format_transaction_line,
    record_settlement,
    total_costs_cents,
)

__all__ = [
    "build_summary",
    "format_ledger_text",
    "format_transaction_line",
    "record_settlement",
    "total_costs_cents",
]
