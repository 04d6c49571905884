"""
Tests for person header parsing.
"""

from splitwiser.parsing.names import (
    clean_for_settlement,
    format_with_parts,
    parse_person_name,
)


class TestParsePersonName:
    """Tests for parse_person_name."""

    def test_plain_name(self):
        person = parse_person_name("Ana")
        assert person.key == "Ana"
        assert person.display_name == "Ana"
        assert person.base_name == "Ana"
        assert person.share_weight == 1
        assert not person.is_excluded

    def test_bare_weight(self):
        """Test that the first integer is the share weight."""
        person = parse_person_name("Ana 3")
        assert person.share_weight == 3
        assert person.base_name == "Ana"
        assert person.key == "Ana 3"

    def test_parenthesised_weight(self):
        person = parse_person_name("Cris (2)")
        assert person.share_weight == 2
        assert person.display_name == "Cris"

    def test_zero_weight_is_raised_to_one(self):
        assert parse_person_name("Bob 0").share_weight == 1

    def test_exclusion_marker(self):
        """Test that '!' anywhere excludes and moves to the end of the name."""
        person = parse_person_name("Rest!aurant")
        assert person.is_excluded
        assert person.base_name == "Restaurant"
        assert person.display_name == "Restaurant!"

    def test_whitespace_is_collapsed(self):
        person = parse_person_name("  Mary   Ann  ")
        assert person.key == "Mary   Ann"
        assert person.base_name == "Mary Ann"

    def test_accented_letters_are_kept(self):
        assert parse_person_name("José").base_name == "José"

    def test_symbol_only_name_falls_back(self):
        """Test that a name without letters keeps its symbols."""
        assert parse_person_name("#1").base_name == "#"


class TestNameFormatting:
    """Tests for rendering names back to text."""

    def test_format_with_parts_weighted(self):
        assert format_with_parts(parse_person_name("Ana 2"), "en-US") == "Ana (2)"

    def test_format_with_parts_unweighted(self):
        assert format_with_parts(parse_person_name("Ana"), "en-US") == "Ana"

    def test_format_with_parts_excluded(self):
        assert format_with_parts(parse_person_name("Bill! 2"), "en-US") == "Bill! (2)"

    def test_clean_for_settlement(self):
        assert clean_for_settlement("Bill!") == "Bill"
        assert clean_for_settlement("Ana") == "Ana"
