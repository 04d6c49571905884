"""
Expense groups.

Expenses shared by exactly the same set of people form one group. Groups
are rounded as a whole, so ten small expenses between the same three
people never accumulate ten separate rounding cents, and settlements can
be matched inside a group before anything crosses group boundaries.
"""

from typing import Union

from splitwiser.models.ledger import Expense, ExpenseGroup, Ledger, PercentageFee


def effective_participants(
    transaction: Union[Expense, PercentageFee],
    ledger: Ledger,
) -> list[str]:
    """
    Keys sharing a transaction, in declaration order.

    An explicit list is taken as-is (it may name excluded participants and
    may leave out the payer). An empty list means every participant not
    marked as excluded.
    """
    if transaction.shared_with:
        named = set(transaction.shared_with)
        return [key for key in ledger.keys if key in named]
    return [key for key, p in ledger.participants.items() if not p.is_excluded]


def build_expense_groups(ledger: Ledger) -> list[ExpenseGroup]:
    """Group expenses by participant set, in order of first appearance."""
    groups: dict[tuple[str, ...], ExpenseGroup] = {}

    for expense in ledger.expenses:
        members = effective_participants(expense, ledger)
        if not members:
            continue

        key = tuple(sorted(members))
        group = groups.get(key)
        if group is None:
            group = groups[key] = ExpenseGroup(key=key, participants=members)

        group.total_cents += expense.amount_cents
        group.payments[expense.paid_by] = (
            group.payments.get(expense.paid_by, 0) + expense.amount_cents
        )

    return list(groups.values())
