"""
Participant reference resolution.

Expense lines name people loosely: "- A, D" or "- ana". A reference
matches every participant whose raw header or display name starts with
it, case-insensitively, plus any participant whose raw header equals it.
"""

from typing import Iterable, Mapping, Optional

from splitwiser.models.ledger import Participant, ReferenceResolution, ResolutionStatus


def resolve_reference(
    reference: str,
    keys: Iterable[str],
    participants: Mapping[str, Participant],
) -> ReferenceResolution:
    """
    Resolve a free-text reference against the given participant keys.

    keys restricts the search (the validator passes only the names that
    survived duplicate detection); participants supplies display names.
    """
    reference = reference.strip()
    if not reference:
        return ReferenceResolution(reference=reference, status=ResolutionStatus.VALID)

    needle = reference.casefold()
    keys = list(keys)

    exact = [key for key in keys if key == reference]
    by_key = [key for key in keys if key.casefold().startswith(needle)]
    by_name = [
        key for key in keys
        if key in participants
        and participants[key].display_name.casefold().startswith(needle)
    ]

    matches = tuple(dict.fromkeys(exact + by_key + by_name))

    if len(matches) == 1:
        status = ResolutionStatus.VALID
    elif matches:
        status = ResolutionStatus.AMBIGUOUS
    else:
        status = ResolutionStatus.NOT_FOUND

    return ReferenceResolution(reference=reference, status=status, matches=matches)


def find_participant(
    reference: str,
    keys: Iterable[str],
    participants: Mapping[str, Participant],
) -> Optional[str]:
    """Return the key a reference points at, or None unless it is unique."""
    return resolve_reference(reference, keys, participants).match
