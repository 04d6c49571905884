"""
Data Models Package

This package contains all Pydantic models used in Splitwiser.
All data flowing through the system must conform to these schemas.
"""

from splitwiser.models.ledger import (
    Allocation,
    Expense,
    ExpenseGroup,
    FeeCharge,
    IssueType,
    Ledger,
    Participant,
    PercentageFee,
    RecordedSettlement,
    ReferenceResolution,
    ResolutionStatus,
    SettlementSuggestion,
    Transaction,
    TransactionKind,
    ValidationIssue,
    cents_to_decimal,
)
from splitwiser.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Allocation",
    "Expense",
    "ExpenseGroup",
    "FeeCharge",
    "IssueType",
    "Ledger",
    "Participant",
    "PercentageFee",
    "RecordedSettlement",
    "ReferenceResolution",
    "ResolutionStatus",
    "SettlementSuggestion",
    "Transaction",
    "TransactionKind",
    "ValidationIssue",
    "cents_to_decimal",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
