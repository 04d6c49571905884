"""
Tests for participant reference resolution.
"""

from splitwiser.models.ledger import ResolutionStatus
from splitwiser.parsing.names import parse_person_name
from splitwiser.parsing.references import find_participant, resolve_reference


def make_participants(*lines):
    return {p.key: p for p in map(parse_person_name, lines)}


class TestResolveReference:
    """Tests for resolve_reference."""

    def setup_method(self):
        self.participants = make_participants("John Smith", "Jane Smith", "Jack Wilson")
        self.keys = list(self.participants)

    def test_unique_prefix(self):
        result = resolve_reference("jo", self.keys, self.participants)
        assert result.status == ResolutionStatus.VALID
        assert result.matches == ("John Smith",)
        assert result.match == "John Smith"

    def test_ambiguous_prefix(self):
        """Test that an initial shared by three people is ambiguous."""
        result = resolve_reference("J", self.keys, self.participants)
        assert result.is_ambiguous
        assert result.matches == ("John Smith", "Jane Smith", "Jack Wilson")
        assert result.match is None

    def test_not_found(self):
        result = resolve_reference("Zed", self.keys, self.participants)
        assert result.not_found
        assert result.matches == ()

    def test_empty_reference_is_valid_without_match(self):
        """Test that an empty optional reference is not an error."""
        result = resolve_reference("   ", self.keys, self.participants)
        assert result.is_valid
        assert result.matches == ()
        assert result.match is None

    def test_matches_display_name(self):
        """Test that a reference can match the cleaned name, not just the raw line."""
        participants = make_participants("!Bob", "Ana")
        result = resolve_reference("bob", list(participants), participants)
        assert result.match == "!Bob"

    def test_exact_key_is_unioned_with_prefix_matches(self):
        participants = make_participants("Ana", "Anabel")
        result = resolve_reference("Ana", list(participants), participants)
        assert result.is_ambiguous
        assert result.matches == ("Ana", "Anabel")

    def test_keys_restrict_the_search(self):
        result = resolve_reference("J", ["Jack Wilson"], self.participants)
        assert result.match == "Jack Wilson"


class TestFindParticipant:
    """Tests for find_participant."""

    def test_returns_key_on_unique_match(self):
        participants = make_participants("Ana 2", "Cris")
        assert find_participant("a", list(participants), participants) == "Ana 2"

    def test_returns_none_when_ambiguous(self):
        participants = make_participants("Ana", "Anabel")
        assert find_participant("an", list(participants), participants) is None
