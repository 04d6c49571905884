"""
Tests for plain-text reports.
"""

from splitwiser.calculation.settlement import settlements
from splitwiser.config import ParserSettings
from splitwiser.models.ledger import SettlementSuggestion
from splitwiser.parsing.builder import build_ledger
from splitwiser.reports import (
    build_summary,
    format_ledger_text,
    record_settlement,
    total_costs_cents,
)
from splitwiser.validation import validate


PARSER = ParserSettings(reset_payer_on_blank_line=True)


def ledger_for(text):
    return build_ledger(text, PARSER)


class TestTotalCosts:
    """Tests for total_costs_cents."""

    def test_includes_fees(self):
        assert total_costs_cents(ledger_for("Ana\n100\n10%\n\nCris")) == 11000

    def test_empty(self):
        assert total_costs_cents(ledger_for("Ana")) == 0


class TestFormatLedgerText:
    """Tests for the canonical re-rendering of the input."""

    TEXT = "Ana 2\n25.5 Lunch - C\n10% tip\n\nCris\n5 > a\n\nDee!"

    def test_canonical_layout(self):
        assert format_ledger_text(ledger_for(self.TEXT), "en-US") == (
            "Ana (2)\n"
            "25.50 Lunch - Cris\n"
            "  10% tip\n"
            "\n"
            "Cris\n"
            " 5.00 > Ana\n"
            "\n"
            "Dee!"
        )

    def test_formatting_is_stable(self):
        """Test that formatting formatted text changes nothing."""
        once = format_ledger_text(ledger_for(self.TEXT), "en-US")
        assert format_ledger_text(ledger_for(once), "en-US") == once

    def test_reference_only_expense(self):
        text = format_ledger_text(ledger_for("Ana\n12 - Cris\n\nCris"), "en-US")
        assert text == "Ana\n12.00 - Cris\n\nCris"

    def test_localised_amounts(self):
        text = format_ledger_text(ledger_for("Ana\n1234,5 Rent"), "pt-BR")
        assert text == "Ana\n1.234,50 Rent"

    def test_ambiguous_display_name_is_written_as_header(self):
        """Test that tidied text names the same people when parsed again."""
        text = "Ana 2\n30 Lunch - Ana 2, Anabel\n\nAnabel"
        tidy = format_ledger_text(ledger_for(text), "en-US")
        assert tidy == "Ana (2)\n30.00 Lunch - Ana (2), Anabel\n\nAnabel"
        assert validate(tidy) == []
        assert format_ledger_text(ledger_for(tidy), "en-US") == tidy

    def test_ambiguous_settlement_target_is_written_as_header(self):
        tidy = format_ledger_text(ledger_for("Ana 2\n\nAnabel\n10 > Ana 2"), "en-US")
        assert tidy == "Ana (2)\nAnabel\n10.00 > Ana (2)"
        assert validate(tidy) == []


class TestBuildSummary:
    """Tests for the shareable summary."""

    def test_open_settlements(self):
        summary = build_summary(ledger_for("Ana\n30 Lunch\n\nCris"), "en-US")
        assert summary == (
            "*EXPENSES*\n"
            "Ana\n"
            "30.00 Lunch\n"
            "\n"
            "*COSTS* = 30.00\n"
            "Ana = 15.00\n"
            "Cris = 15.00\n"
            "\n"
            "*SETTLEMENTS*\n"
            "Cris owes 15.00 to Ana\n"
        )

    def test_all_settled(self):
        summary = build_summary(ledger_for("Ana\n30 Lunch\n\nCris\n15 > Ana"), "en-US")
        assert summary.endswith(
            "\n*ALL SETTLED!*\n"
            "Cris paid 15.00 to Ana\n"
        )

    def test_nothing_spent(self):
        summary = build_summary(ledger_for("Ana\n\nCris"), "en-US")
        assert summary == (
            "\n*COSTS*\n"
            "Ana = 0.00\n"
            "Cris = 0.00\n"
            "\n"
            "*SETTLEMENTS*\n"
            "Nothing to settle!\n"
        )

    def test_excluded_participants(self):
        """Test that excluded people are left out of costs and named plainly."""
        summary = build_summary(ledger_for("Bill!\n30\n\nAna 2\n\nCris"), "en-US")
        assert "Bill! = " not in summary
        assert "Ana (2) = 20.00" in summary
        assert "Ana owes 20.00 to Bill" in summary
        assert "Cris owes 10.00 to Bill" in summary

    def test_portuguese(self):
        summary = build_summary(ledger_for("Ana\n30 Almoço\n\nCris"), "pt-BR")
        assert "*GASTOS*" in summary
        assert "*CUSTOS* = 30,00" in summary
        assert "Cris deve 15,00 para Ana" in summary


class TestRecordSettlement:
    """Tests for adding a payment line to the input text."""

    def test_appends_to_last_block(self):
        text = "Ana\n30 Lunch\n\nCris"
        ledger = ledger_for(text)
        suggestion = SettlementSuggestion(from_key="Cris", to_key="Ana", amount_cents=1500)
        assert record_settlement(text, suggestion, ledger, "en-US") == (
            "Ana\n30 Lunch\n\nCris\n15.00 > Ana"
        )

    def test_inserts_before_blank_line(self):
        text = "Cris\n5 Snack\n\nAna\n30 Lunch"
        ledger = ledger_for(text)
        suggestion = SettlementSuggestion(from_key="Cris", to_key="Ana", amount_cents=1000)
        assert record_settlement(text, suggestion, ledger, "en-US") == (
            "Cris\n5 Snack\n10.00 > Ana\n\nAna\n30 Lunch"
        )

    def test_inserts_before_next_header(self):
        text = "Cris\n5 Snack\nAna\n30 Lunch"
        ledger = ledger_for(text)
        suggestion = SettlementSuggestion(from_key="Cris", to_key="Ana", amount_cents=1000)
        assert record_settlement(text, suggestion, ledger, "en-US") == (
            "Cris\n5 Snack\n10.00 > Ana\nAna\n30 Lunch"
        )

    def test_recipient_name_is_cleaned(self):
        text = "Bill!\n30\n\nAna"
        ledger = ledger_for(text)
        suggestion = SettlementSuggestion(from_key="Ana", to_key="Bill!", amount_cents=3000)
        assert record_settlement(text, suggestion, ledger, "en-US").endswith("Ana\n30.00 > Bill")

    def test_ambiguous_recipient_is_written_in_full(self):
        """Test that the added line still validates when 'Ana' would be ambiguous."""
        text = "Ana 2\n30 Lunch\n\nAnabel"
        suggestion = SettlementSuggestion(from_key="Anabel", to_key="Ana 2", amount_cents=1000)
        new_text = record_settlement(text, suggestion, ledger_for(text), "en-US")
        assert new_text == "Ana 2\n30 Lunch\n\nAnabel\n10.00 > Ana 2"
        assert validate(new_text) == []
        assert settlements(ledger_for(new_text)) == []

    def test_unknown_payer_leaves_text_unchanged(self):
        text = "Ana\n30 Lunch\n\nCris"
        suggestion = SettlementSuggestion(from_key="Zed", to_key="Ana", amount_cents=1500)
        assert record_settlement(text, suggestion, ledger_for(text), "en-US") == text

    def test_recorded_suggestion_settles(self):
        """Test that recording every suggestion leaves nothing to settle."""
        text = "Ana\n30 Lunch\n\nCris\n\nDee\n7.50 Coffee"
        for suggestion in settlements(ledger_for(text)):
            text = record_settlement(text, suggestion, ledger_for(text), "en-US")
        assert settlements(ledger_for(text)) == []
