"""
Audit Models for Splitwiser

Every evaluation of an input text emits a handful of audit events:
validation, parsing, allocation, settlement. Events from the same
evaluation share a correlation ID, so a log can be read back per run.

Audit events are append-only values. Nothing in the calculation core
depends on them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Validation
    DOCUMENT_VALIDATED = "document_validated"
    VALIDATION_FAILED = "validation_failed"

    # Parsing and calculation
    LEDGER_PARSED = "ledger_parsed"
    FAIR_SHARES_COMPUTED = "fair_shares_computed"
    SETTLEMENTS_COMPUTED = "settlements_computed"
    SETTLEMENT_COMPUTATION_FAILED = "settlement_computation_failed"

    # User actions
    SETTLEMENT_RECORDED = "settlement_recorded"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of the audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one evaluation"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.ledger_parsed(3, 7, correlation_id)
    """

    @staticmethod
    def document_validated(
        line_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DOCUMENT_VALIDATED,
            correlation_id=correlation_id,
            description=f"Document with {line_count} lines passed validation",
            details={"line_count": line_count},
        )

    @staticmethod
    def validation_failed(
        issues: list[dict],
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Validation failed with {len(issues)} issues",
            details={"issues": issues},
        )

    @staticmethod
    def ledger_parsed(
        participant_count: int,
        transaction_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_PARSED,
            correlation_id=correlation_id,
            description=(
                f"Parsed {participant_count} participants and "
                f"{transaction_count} transactions"
            ),
            details={
                "participant_count": participant_count,
                "transaction_count": transaction_count,
            },
        )

    @staticmethod
    def fair_shares_computed(
        total_cents: int,
        group_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FAIR_SHARES_COMPUTED,
            correlation_id=correlation_id,
            description=f"Allocated {total_cents} cents across {group_count} expense groups",
            details={
                "total_cents": total_cents,
                "group_count": group_count,
            },
        )

    @staticmethod
    def settlements_computed(
        suggestion_count: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENTS_COMPUTED,
            correlation_id=correlation_id,
            description=f"Computed {suggestion_count} settlement suggestions",
            details={"suggestion_count": suggestion_count},
        )

    @staticmethod
    def settlement_computation_failed(
        error_message: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_COMPUTATION_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description="Settlement suggestions could not be computed",
            error_message=error_message,
        )

    @staticmethod
    def settlement_recorded(
        from_key: str,
        to_key: str,
        amount_cents: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SETTLEMENT_RECORDED,
            correlation_id=correlation_id,
            description=f"Recorded payment from {from_key} to {to_key}",
            details={
                "from": from_key,
                "to": to_key,
                "amount_cents": amount_cents,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"System error: {error_type}",
            details=details or {},
            error_message=error_message,
        )
