"""
Tests for fair-share allocation.

All expectations are exact: shares are computed in integer cents and
must add up to the cents that were spent.
"""

from decimal import Decimal

from splitwiser.calculation.allocator import FairShareAllocator, fair_shares
from splitwiser.calculation.groups import build_expense_groups, effective_participants
from splitwiser.config import ParserSettings
from splitwiser.parsing.builder import build_ledger


SETTINGS = ParserSettings(reset_payer_on_blank_line=True)


def ledger_for(text):
    return build_ledger(text, SETTINGS)


def shares_for(text):
    return fair_shares(ledger_for(text))


BILL_SPLIT = (
    "Bill!\n30 Appetizers\n12 Drink - D\n12 Drink - C\n16 Entree - D\n"
    "18 Entree - C\n32 Entree - A\n10% Service fee\n\nAna 2\nDavid\nCris"
)


class TestExpenseGroups:
    """Tests for grouping expenses by participant set."""

    def test_default_split_excludes_marked_participants(self):
        ledger = ledger_for("Bill!\n30\n\nAna\n\nCris")
        assert effective_participants(ledger.expenses[0], ledger) == ["Ana", "Cris"]

    def test_groups_in_first_appearance_order(self):
        ledger = ledger_for("Ana\n10\n5 - Cris\n20\n\nCris\n7 - C")
        groups = build_expense_groups(ledger)
        assert [g.key for g in groups] == [("Ana", "Cris"), ("Cris",)]
        assert groups[0].total_cents == 3000
        assert groups[1].total_cents == 1200
        assert groups[1].payments == {"Ana": 500, "Cris": 700}


class TestFairShares:
    """Tests for fair_shares."""

    def test_even_split_gives_odd_cent_to_non_payer(self):
        shares = shares_for("John\n100 Dinner\n\nJane\n\nBob")
        assert shares == {
            "John": Decimal("33.33"),
            "Jane": Decimal("33.34"),
            "Bob": Decimal("33.33"),
        }

    def test_divisible_total_splits_exactly(self):
        shares = shares_for("A\n174.38\n\nB\n35.98\n\nC\n\nD")
        assert set(shares.values()) == {Decimal("52.59")}

    def test_extra_cent_goes_to_a_non_payer(self):
        shares = shares_for("A\n174.38\n\nB\n35.99\n\nC\n\nD")
        assert shares == {
            "A": Decimal("52.59"),
            "B": Decimal("52.59"),
            "C": Decimal("52.60"),
            "D": Decimal("52.59"),
        }

    def test_weighted_split(self):
        shares = shares_for("John 2\n100\n\nJane")
        assert shares == {"John 2": Decimal("66.67"), "Jane": Decimal("33.33")}

    def test_excluded_participant_owes_nothing(self):
        shares = shares_for("Restaurant!\n100\n\nAna\n\nCris")
        assert shares["Restaurant!"] == Decimal("0.00")
        assert shares["Ana"] == Decimal("50.00")
        assert shares["Cris"] == Decimal("50.00")

    def test_explicit_list_may_omit_payer(self):
        shares = shares_for("Ana\n30 Taxi - Cris\n\nCris")
        assert shares == {"Ana": Decimal("0.00"), "Cris": Decimal("30.00")}

    def test_explicit_list_may_name_excluded_participant(self):
        shares = shares_for("Bill!\n30 Drink - B\n\nAna")
        assert shares["Bill!"] == Decimal("30.00")

    def test_empty_ledger(self):
        assert shares_for("") == {}


class TestPercentageFees:
    """Tests for fees applied on top of shares."""

    def test_bill_split_with_service_fee(self):
        shares = shares_for(BILL_SPLIT)
        assert shares == {
            "Bill!": Decimal("0.00"),
            "Ana 2": Decimal("51.70"),
            "David": Decimal("39.05"),
            "Cris": Decimal("41.25"),
        }

    def test_fees_cascade_in_document_order(self):
        """Test that a tip after a service fee is also charged on the fee."""
        shares = shares_for("Ana\n100\n10% service\n10% tip\n\nCris")
        assert shares == {"Ana": Decimal("60.50"), "Cris": Decimal("60.50")}

    def test_fee_on_explicit_participants(self):
        shares = shares_for("Ana\n100 - Ana, Cris\n50% tip - Cris\n\nCris")
        assert shares == {"Ana": Decimal("50.00"), "Cris": Decimal("75.00")}

    def test_fee_rounds_half_up(self):
        shares = shares_for("Ana\n0.10\n10%\n\nCris")
        assert shares == {"Ana": Decimal("0.06"), "Cris": Decimal("0.06")}


class TestAllocation:
    """Tests for the cent-level allocation."""

    def test_conservation(self):
        """Test that shares add up to expenses plus fees actually charged."""
        ledger = ledger_for(BILL_SPLIT)
        allocation = FairShareAllocator().allocate(ledger)
        expenses = sum(e.amount_cents for e in ledger.expenses)
        fees = sum(charge.total_cents for charge in allocation.fee_charges)
        assert allocation.total_cents == expenses + fees == 13200

    def test_group_shares_are_recorded(self):
        ledger = ledger_for("John\n100 Dinner\n\nJane\n\nBob")
        allocation = FairShareAllocator().allocate(ledger)
        assert allocation.groups[0].shares == {"John": 3333, "Jane": 3334, "Bob": 3333}

    def test_custom_remainder_priority(self):
        """Test that the odd-cent ranking can be replaced."""
        allocator = FairShareAllocator(
            priority=lambda key, remainder, group, position: (-position,)
        )
        allocation = allocator.allocate(ledger_for("John\n100 Dinner\n\nJane\n\nBob"))
        assert allocation.owed_cents == {"John": 3333, "Jane": 3333, "Bob": 3334}
