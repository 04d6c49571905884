"""
Splitwiser

Split shared expenses from a plain-text list of who paid for what.

    >>> ledger = parse("Ana\\n30 Lunch\\n\\nCris\\n")
    >>> fair_shares(ledger)
    {'Ana': Decimal('15.00'), 'Cris': Decimal('15.00')}
    >>> [(s.from_key, s.to_key, s.amount) for s in settlements(ledger)]
    [('Cris', 'Ana', Decimal('15.00'))]
"""

from splitwiser.orchestrator import fair_shares, parse, settlements, validate
from splitwiser.validation import LedgerValidationError, SplitwiserError

__version__ = "1.0.0"
__author__ = "Splitwiser Team"

__all__ = [
    "LedgerValidationError",
    "SplitwiserError",
    "fair_shares",
    "parse",
    "settlements",
    "validate",
]
