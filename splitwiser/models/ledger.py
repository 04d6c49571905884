"""
Core Data Models for Splitwiser

These models define the schemas for everything that flows from the input
text to the settlement list:

    text -> Ledger -> Allocation -> SettlementSuggestion

Money is carried as integer cents everywhere. Decimal values only appear
at the edges (fair_shares(), SettlementSuggestion.amount) where results
are shown to people.

Ledger and its parts are frozen. They are built once per evaluation and
never mutated afterwards, so evaluating the same text twice yields equal
ledgers.
"""

from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


CENT = Decimal("0.01")


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to a 2-place Decimal."""
    return (Decimal(cents) / 100).quantize(CENT)


# =============================================================================
# ENUMS
# =============================================================================

class TransactionKind(str, Enum):
    """Kinds of lines that carry money."""
    EXPENSE = "expense"
    PERCENTAGE = "percentage"
    SETTLEMENT = "settlement"


class ResolutionStatus(str, Enum):
    """Outcome of resolving a free-text participant reference."""
    VALID = "valid"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


class IssueType(str, Enum):
    """Document problems that block allocation."""
    DUPLICATE_NAME = "duplicate_name"
    AMBIGUOUS_REFERENCE = "ambiguous_reference"
    PERSON_NOT_FOUND = "person_not_found"


# =============================================================================
# PARTICIPANTS
# =============================================================================

class Participant(BaseModel):
    """
    A person (or entity, like a restaurant) declared on a header line.

    The raw header line is the identity: every transaction refers to
    participants by key, never by display name.
    """
    model_config = ConfigDict(frozen=True)

    key: str = Field(
        ...,
        min_length=1,
        description="Raw declaration line (stripped)"
    )
    display_name: str = Field(
        ...,
        description="Cleaned name, with a trailing '!' when excluded"
    )
    base_name: str = Field(
        ...,
        description="Cleaned name without the exclusion marker"
    )
    share_weight: int = Field(
        default=1,
        ge=1,
        description="Proportional share of pooled costs ('parts')"
    )
    is_excluded: bool = Field(
        default=False,
        description="Owed money but not part of default splits"
    )


# =============================================================================
# TRANSACTIONS
# =============================================================================

class Expense(BaseModel):
    """An amount paid by one participant and shared by a set of others."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TransactionKind.EXPENSE] = TransactionKind.EXPENSE
    amount_cents: int = Field(..., gt=0)
    description: str = ""
    shared_with: tuple[str, ...] = Field(
        default=(),
        description="Participant keys; empty means all non-excluded participants"
    )
    paid_by: str

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)


class PercentageFee(BaseModel):
    """A percentage add-on (service fee, tip) applied to accumulated shares."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TransactionKind.PERCENTAGE] = TransactionKind.PERCENTAGE
    percentage: float = Field(..., gt=0)
    description: str = ""
    shared_with: tuple[str, ...] = ()
    paid_by: str


class RecordedSettlement(BaseModel):
    """A payment already made from one participant to another."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[TransactionKind.SETTLEMENT] = TransactionKind.SETTLEMENT
    amount_cents: int = Field(..., gt=0)
    paid_by: str
    settle_to: str

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)


Transaction = Annotated[
    Union[Expense, PercentageFee, RecordedSettlement],
    Field(discriminator="kind"),
]


class Ledger(BaseModel):
    """
    Everything parsed from one input text.

    participants keeps declaration order; it is used as the final
    tie-break wherever an ordering has to be deterministic.
    """
    model_config = ConfigDict(frozen=True)

    participants: dict[str, Participant] = Field(default_factory=dict)
    transactions: tuple[Transaction, ...] = ()

    @property
    def keys(self) -> list[str]:
        return list(self.participants)

    @property
    def expenses(self) -> list[Expense]:
        return [t for t in self.transactions if isinstance(t, Expense)]

    @property
    def percentage_fees(self) -> list[PercentageFee]:
        return [t for t in self.transactions if isinstance(t, PercentageFee)]

    @property
    def recorded_settlements(self) -> list[RecordedSettlement]:
        return [t for t in self.transactions if isinstance(t, RecordedSettlement)]

    def display_name(self, key: str) -> str:
        participant = self.participants.get(key)
        return participant.display_name if participant else key

    def paid_by(self, key: str) -> list[Transaction]:
        """Transactions attributed to one participant, in document order."""
        return [t for t in self.transactions if t.paid_by == key]


# =============================================================================
# DERIVED VALUES
# =============================================================================

class ExpenseGroup(BaseModel):
    """
    Participants sharing a specific subset of expenses.

    Derived on every evaluation; never stored. payments also records
    payers who are not members of the group (an expense may omit its
    payer), so that group balances always sum to zero.
    """

    key: tuple[str, ...]
    participants: list[str] = Field(
        default_factory=list,
        description="Members in declaration order"
    )
    total_cents: int = 0
    payments: dict[str, int] = Field(default_factory=dict)
    shares: dict[str, int] = Field(
        default_factory=dict,
        description="Cents allocated to each member"
    )

    @property
    def total(self) -> Decimal:
        return cents_to_decimal(self.total_cents)


class FeeCharge(BaseModel):
    """Cents charged to each affected participant by one percentage fee."""

    fee: PercentageFee
    charges: dict[str, int] = Field(default_factory=dict)

    @property
    def total_cents(self) -> int:
        return sum(self.charges.values())


class Allocation(BaseModel):
    """Result of the fair-share allocation, in cents."""

    groups: list[ExpenseGroup] = Field(default_factory=list)
    fee_charges: list[FeeCharge] = Field(default_factory=list)
    owed_cents: dict[str, int] = Field(default_factory=dict)

    @property
    def total_cents(self) -> int:
        return sum(self.owed_cents.values())


class SettlementSuggestion(BaseModel):
    """A recommended payment: from_key should pay to_key."""
    model_config = ConfigDict(frozen=True)

    from_key: str
    to_key: str
    amount_cents: int = Field(..., gt=0)

    @property
    def amount(self) -> Decimal:
        return cents_to_decimal(self.amount_cents)


class ReferenceResolution(BaseModel):
    """
    Result of resolving a reference such as "J" or "ana".

    Exactly one of three states; an empty reference resolves as VALID
    with no matches (the optional-field case).
    """
    model_config = ConfigDict(frozen=True)

    reference: str
    status: ResolutionStatus
    matches: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.status == ResolutionStatus.VALID

    @property
    def is_ambiguous(self) -> bool:
        return self.status == ResolutionStatus.AMBIGUOUS

    @property
    def not_found(self) -> bool:
        return self.status == ResolutionStatus.NOT_FOUND

    @property
    def match(self) -> Optional[str]:
        """The single matching key, if there is exactly one."""
        if self.is_valid and len(self.matches) == 1:
            return self.matches[0]
        return None


class ValidationIssue(BaseModel):
    """A single problem found in the input document."""
    model_config = ConfigDict(frozen=True)

    line: str = Field(
        ...,
        description="The offending source line"
    )
    message: str = Field(
        ...,
        description="Human-readable, localised description"
    )
    issue_type: IssueType
    reference: Optional[str] = Field(
        default=None,
        description="The reference or name that caused the issue"
    )
