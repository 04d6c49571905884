"""
Settlement Suggestions

DESIGN DECISION: Settle inside expense groups first, then across them.
People who only shared a dinner should only pay each other for that
dinner; cross-group payments are used for whatever is left over.

Steps:
1. Balance per participant = what they paid (expenses, plus the fees
   they covered) - what they owe.
2. Per expense group, match the group's debtors against its creditors,
   largest against largest.
3. One more greedy pass over the residual balances.
4. Net the ideal transfers per pair of people and subtract the payments
   already recorded in the ledger. Overpayments come back as reverse
   corrections, so the list never asks anyone for more than is owed.

IMPORTANT: settle() never raises. Settlement suggestions are a
convenience on top of the fair shares; a failure is logged and yields
an empty list.
"""

from typing import Iterable, Optional

import structlog

from splitwiser.calculation.allocator import FairShareAllocator
from splitwiser.config import SettlementSettings, get_settings
from splitwiser.models.ledger import (
    Allocation,
    ExpenseGroup,
    Ledger,
    RecordedSettlement,
    SettlementSuggestion,
)


logger = structlog.get_logger(__name__)


Transfer = tuple[str, str, int]


def match_balances(balances: dict[str, int], tolerance: int = 1) -> list[Transfer]:
    """
    Greedy debtor/creditor matching over signed cent balances.

    Ties keep the order of balances, so callers pass balances in
    declaration order to get deterministic output.
    """
    debtors = sorted(
        ([key, -amount] for key, amount in balances.items() if amount < -tolerance),
        key=lambda entry: -entry[1],
    )
    creditors = sorted(
        ([key, amount] for key, amount in balances.items() if amount > tolerance),
        key=lambda entry: -entry[1],
    )

    transfers = []
    i = j = 0
    while i < len(debtors) and j < len(creditors):
        debtor, creditor = debtors[i], creditors[j]
        amount = min(debtor[1], creditor[1])

        if amount > 0:
            transfers.append((debtor[0], creditor[0], amount))
            debtor[1] -= amount
            creditor[1] -= amount

        if debtor[1] <= tolerance:
            i += 1
        if creditor[1] <= tolerance:
            j += 1

    return transfers


def net_by_pair(transfers: Iterable[Transfer]) -> dict[tuple[str, str], int]:
    """
    Net transfers per unordered pair.

    Each pair keeps the direction it was first seen in; the value is
    signed (negative means the flow goes the other way).
    """
    pairs: dict[tuple[str, str], int] = {}
    for from_key, to_key, amount in transfers:
        if (to_key, from_key) in pairs:
            pairs[(to_key, from_key)] -= amount
        else:
            pairs[(from_key, to_key)] = pairs.get((from_key, to_key), 0) + amount
    return pairs


class SettlementEngine:
    """
    Turns a ledger into a short list of payments that balance everyone.
    """

    def __init__(
        self,
        settings: Optional[SettlementSettings] = None,
        allocator: Optional[FairShareAllocator] = None,
    ):
        self._settings = settings or get_settings().settlement
        self._allocator = allocator or FairShareAllocator()

    @property
    def tolerance(self) -> int:
        return self._settings.balance_tolerance_cents

    def balances(self, ledger: Ledger, allocation: Allocation) -> dict[str, int]:
        """
        Signed cents per participant: positive means they are owed money.

        Fee payers are credited with what the fee actually charged, so
        the balances always sum to zero.
        """
        paid = {key: 0 for key in ledger.keys}
        for group in allocation.groups:
            for key, cents in group.payments.items():
                paid[key] += cents
        for charge in allocation.fee_charges:
            paid[charge.fee.paid_by] += charge.total_cents

        return {key: paid[key] - allocation.owed_cents.get(key, 0) for key in ledger.keys}

    def _group_balances(self, group: ExpenseGroup, ledger: Ledger) -> dict[str, int]:
        involved = set(group.participants) | set(group.payments)
        return {
            key: group.payments.get(key, 0) - group.shares.get(key, 0)
            for key in ledger.keys
            if key in involved
        }

    def ideal_transfers(self, ledger: Ledger, allocation: Allocation) -> list[Transfer]:
        """Transfers that settle every balance, ignoring recorded payments."""
        residual = self.balances(ledger, allocation)
        transfers: list[Transfer] = []

        for group in allocation.groups:
            for from_key, to_key, amount in match_balances(
                self._group_balances(group, ledger), self.tolerance
            ):
                transfers.append((from_key, to_key, amount))
                residual[from_key] += amount
                residual[to_key] -= amount

        # Cross-group leftovers (fees, people in several groups)
        transfers.extend(match_balances(residual, self.tolerance))
        return transfers

    def reconcile(
        self,
        transfers: list[Transfer],
        recorded: list[RecordedSettlement],
    ) -> list[SettlementSuggestion]:
        """
        Subtract recorded payments from the ideal transfers.

        Anything still owed stays a suggestion; anything overpaid beyond
        the tolerance becomes a reverse correction.
        """
        pairs = net_by_pair(
            list(transfers)
            + [
                (s.settle_to, s.paid_by, s.amount_cents)
                for s in recorded
                if s.settle_to != s.paid_by
            ]
        )

        suggestions = []
        for (from_key, to_key), remaining in pairs.items():
            if remaining > self.tolerance:
                suggestions.append(SettlementSuggestion(
                    from_key=from_key, to_key=to_key, amount_cents=remaining,
                ))
            elif remaining < -self.tolerance:
                suggestions.append(SettlementSuggestion(
                    from_key=to_key, to_key=from_key, amount_cents=-remaining,
                ))
        return suggestions

    def compute(
        self,
        ledger: Ledger,
        allocation: Optional[Allocation] = None,
    ) -> list[SettlementSuggestion]:
        """Like settle(), but failures propagate to the caller."""
        allocation = allocation or self._allocator.allocate(ledger)
        transfers = self.ideal_transfers(ledger, allocation)
        return self.reconcile(transfers, ledger.recorded_settlements)

    def settle(
        self,
        ledger: Ledger,
        allocation: Optional[Allocation] = None,
    ) -> list[SettlementSuggestion]:
        try:
            suggestions = self.compute(ledger, allocation)
        except Exception as e:
            logger.error(
                "settlement_computation_failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            return []

        logger.debug("settlements_computed", suggestion_count=len(suggestions))
        return suggestions


def settlements(ledger: Ledger) -> list[SettlementSuggestion]:
    """Shortcut for SettlementEngine().settle(ledger)."""
    return SettlementEngine().settle(ledger)
