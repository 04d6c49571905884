"""
Two-Pass Document Validation

DESIGN DECISION: The whole document is checked before any ledger is
trusted for allocation.

PASS 1 - NAMES:
- Collect every person header
- Two headers with the same name (case-insensitive) are a duplicate
- The duplicate is left out of the active name set, so references to it
  do not also show up as ambiguous

PASS 2 - REFERENCES:
- Every settlement target must resolve to exactly one person
- Every name after " - " on an expense or fee line must resolve to
  exactly one person

IMPORTANT: Validation NEVER silently fixes issues.
It reports every one of them (name issues first, then reference issues,
each in document order) and the parser refuses to build a ledger until
there are none.
"""

from typing import Optional

import structlog

from splitwiser.i18n import localize
from splitwiser.models.ledger import (
    IssueType,
    Participant,
    ReferenceResolution,
    ValidationIssue,
)
from splitwiser.parsing.builder import split_lines
from splitwiser.parsing.lines import (
    is_person_header,
    participant_references,
    settlement_target,
)
from splitwiser.parsing.names import parse_person_name
from splitwiser.parsing.references import resolve_reference


logger = structlog.get_logger(__name__)


class SplitwiserError(Exception):
    """Base class for errors raised by splitwiser."""


class LedgerValidationError(SplitwiserError):
    """Raised by parse() when the document has validation issues."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        details = "\n".join(f"{issue.line}: {issue.message}" for issue in self.issues)
        super().__init__(f"Validation failed:\n{details}")


class DocumentValidator:
    """
    Validates an input document through a two-pass scan.

    Pass 1: duplicate person names
    Pass 2: settlement targets and participant references
    """

    def __init__(self, locale: Optional[str] = None):
        """
        Initialize validator.

        Args:
            locale: Language for issue messages.
                    If None, the configured locale is used.
        """
        self._locale = locale

    def _check_names(
        self,
        lines: list[str],
    ) -> tuple[dict[str, Participant], list[ValidationIssue]]:
        """
        Pass 1: duplicate detection.

        Returns: (active participants, list_of_issues)
        """
        active: dict[str, Participant] = {}
        seen: dict[str, Participant] = {}
        issues = []

        for line in lines:
            if not is_person_header(line):
                continue

            participant = parse_person_name(line)
            folded = participant.base_name.casefold()

            if folded in seen:
                issues.append(ValidationIssue(
                    line=line,
                    message=localize(
                        "DUPLICATE_NAME_TEMPLATE",
                        {
                            "currentName": participant.display_name,
                            "existingName": seen[folded].display_name,
                        },
                        self._locale,
                    ),
                    issue_type=IssueType.DUPLICATE_NAME,
                    reference=participant.display_name,
                ))
                continue

            seen[folded] = participant
            active.setdefault(participant.key, participant)

        return active, issues

    def _reference_issue(
        self,
        line: str,
        resolution: ReferenceResolution,
        participants: dict[str, Participant],
    ) -> Optional[ValidationIssue]:
        if resolution.is_ambiguous:
            names = ", ".join(participants[key].display_name for key in resolution.matches)
            return ValidationIssue(
                line=line,
                message=localize(
                    "AMBIGUOUS_PERSON_TEMPLATE",
                    {"personRef": resolution.reference, "matchingNames": names},
                    self._locale,
                ),
                issue_type=IssueType.AMBIGUOUS_REFERENCE,
                reference=resolution.reference,
            )

        if resolution.not_found:
            return ValidationIssue(
                line=line,
                message=localize(
                    "PERSON_NOT_FOUND_TEMPLATE",
                    {
                        "personRef": resolution.reference,
                        "errorMessage": localize("PERSON_NOT_FOUND", locale=self._locale),
                    },
                    self._locale,
                ),
                issue_type=IssueType.PERSON_NOT_FOUND,
                reference=resolution.reference,
            )

        return None

    def _check_references(
        self,
        lines: list[str],
        participants: dict[str, Participant],
    ) -> list[ValidationIssue]:
        """
        Pass 2: every reference must point at exactly one person.
        """
        issues = []
        keys = list(participants)

        for line in lines:
            if not line:
                continue

            target = settlement_target(line)
            references = [target] if target is not None else participant_references(line)

            for reference in references:
                resolution = resolve_reference(reference, keys, participants)
                issue = self._reference_issue(line, resolution, participants)
                if issue is not None:
                    issues.append(issue)

        return issues

    def validate(self, text: str) -> list[ValidationIssue]:
        """
        Run both passes over the document.

        Never raises; an empty list means the document can be parsed.
        """
        lines = split_lines(text)
        participants, issues = self._check_names(lines)
        issues.extend(self._check_references(lines, participants))

        if issues:
            logger.info("document_invalid", issue_count=len(issues))

        return issues


def validate(text: str, locale: Optional[str] = None) -> list[ValidationIssue]:
    """Shortcut for DocumentValidator(locale).validate(text)."""
    return DocumentValidator(locale).validate(text)
