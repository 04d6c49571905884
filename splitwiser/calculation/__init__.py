"""Fair-share allocation and settlement matching."""

from splitwiser.calculation.allocator import (
    FairShareAllocator,
    default_remainder_priority,
    fair_shares,
)
from splitwiser.calculation.groups import build_expense_groups, effective_participants
from splitwiser.calculation.settlement import (
    SettlementEngine,
    match_balances,
    net_by_pair,
    settlements,
)

__all__ = [
    "FairShareAllocator",
    "SettlementEngine",
    "build_expense_groups",
    "default_remainder_priority",
    "effective_participants",
    "fair_shares",
    "match_balances",
    "net_by_pair",
    "settlements",
]
