"""
Fair Share Allocation

DESIGN DECISION: All arithmetic is done in integer cents.
Floats never touch money after parsing, so the sum of all shares is
exactly the sum of all expenses plus the fees actually charged.

Per expense group, with W the total weight of its members:

1. Every member gets floor(total * w / W) cents, remembering the
   remainder (total * w) mod W.
2. The remainders add up to a whole number of cents (extra cents, plus
   final cents for the part that does not divide by W).
3. Members are ranked by remainder (largest first), then by what they
   paid into the group (least first), then by declaration order. Final
   cents go one each down that ranking; extra cents go proportionally by
   weight, with leftovers one each down the ranking.

The ranking means an odd cent lands on someone who did not pay, rather
than on the person who fronted the money.

Percentage fees are applied afterwards, in document order, to the running
total of every affected participant (so a tip after a service fee also
tips the fee).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional

import structlog

from splitwiser.calculation.groups import build_expense_groups, effective_participants
from splitwiser.models.ledger import (
    Allocation,
    ExpenseGroup,
    FeeCharge,
    Ledger,
    cents_to_decimal,
)


logger = structlog.get_logger(__name__)


# (participant key, remainder, group, declaration index) -> sort key
RemainderPriority = Callable[[str, int, ExpenseGroup, int], tuple]


def default_remainder_priority(
    key: str,
    remainder: int,
    group: ExpenseGroup,
    position: int,
) -> tuple:
    return (-remainder, group.payments.get(key, 0), position)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _hand_out(cents: int, order: list[str], shares: dict[str, int]) -> None:
    """Give cents one at a time down order, wrapping around if needed."""
    for i in range(cents):
        shares[order[i % len(order)]] += 1


class FairShareAllocator:
    """
    Computes what every participant owes, in cents.

    The remainder ranking is pluggable; pass a different priority to
    change who receives odd cents.
    """

    def __init__(self, priority: Optional[RemainderPriority] = None):
        self._priority = priority or default_remainder_priority

    def allocate_group(self, group: ExpenseGroup, ledger: Ledger) -> dict[str, int]:
        """Split one group's total among its members; fills group.shares."""
        weights = {key: ledger.participants[key].share_weight for key in group.participants}
        total_weight = sum(weights.values())

        shares: dict[str, int] = {}
        remainders: dict[str, int] = {}
        for key in group.participants:
            shares[key], remainders[key] = divmod(group.total_cents * weights[key], total_weight)

        extra_whole_cents, final_remainder_cents = divmod(sum(remainders.values()), total_weight)

        position = {key: i for i, key in enumerate(ledger.keys)}
        order = sorted(
            group.participants,
            key=lambda k: self._priority(k, remainders[k], group, position[k]),
        )

        _hand_out(final_remainder_cents, order, shares)

        handed = 0
        for key in order:
            portion = extra_whole_cents * weights[key] // total_weight
            shares[key] += portion
            handed += portion
        _hand_out(extra_whole_cents - handed, order, shares)

        group.shares = shares
        return shares

    def apply_fees(self, ledger: Ledger, owed: dict[str, int]) -> list[FeeCharge]:
        """Add every percentage fee to the running totals, in ledger order."""
        charges = []
        for fee in ledger.percentage_fees:
            rate = Decimal(str(fee.percentage)) / 100
            charge = FeeCharge(fee=fee)
            for key in effective_participants(fee, ledger):
                amount = round_half_up(Decimal(owed[key]) * rate)
                charge.charges[key] = amount
                owed[key] += amount
            charges.append(charge)
        return charges

    def allocate(self, ledger: Ledger) -> Allocation:
        owed = {key: 0 for key in ledger.keys}

        groups = build_expense_groups(ledger)
        for group in groups:
            for key, cents in self.allocate_group(group, ledger).items():
                owed[key] += cents

        fee_charges = self.apply_fees(ledger, owed)

        allocation = Allocation(groups=groups, fee_charges=fee_charges, owed_cents=owed)

        logger.debug(
            "fair_shares_allocated",
            group_count=len(groups),
            total_cents=allocation.total_cents,
        )

        return allocation


def fair_shares(ledger: Ledger) -> dict[str, Decimal]:
    """What every participant owes, as 2-place Decimals, in declaration order."""
    allocation = FairShareAllocator().allocate(ledger)
    return {key: cents_to_decimal(cents) for key, cents in allocation.owed_cents.items()}
