"""
Audit Logger

DESIGN DECISION: Every evaluation of an input text is logged.
This provides:
1. Traceability from a settlement suggestion back to its input
2. Debugging capability for rounding and matching questions
3. A record of settlements the user marked as paid

The audit logger:
- Is synchronous; the calculation core has no I/O to wait on
- Gracefully handles failures (doesn't crash the app if a sink fails)
- Supports correlation IDs to trace related events
"""

from typing import Callable, Optional
from uuid import UUID, uuid4

import structlog

from splitwiser.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


AuditSink = Callable[[AuditEvent], None]


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An optional sink (a list, a file writer, the UI history)
    """

    def __init__(self, sink: Optional[AuditSink] = None):
        """
        Initialize audit logger.

        Args:
            sink: Callable receiving every event after it is logged.
                  If None, only logs locally.
        """
        self._sink = sink
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Forwards to the sink if one is configured.

        Returns True if the sink accepted the event (or no sink configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._sink:
            try:
                self._sink(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_sink_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_document_validated(self, line_count: int, correlation_id: UUID) -> None:
        """Log a document that passed validation."""
        self.log(AuditEventBuilder.document_validated(
            line_count=line_count,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(self, issues: list[dict], correlation_id: UUID) -> None:
        """Log validation failure."""
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_ledger_parsed(
        self,
        participant_count: int,
        transaction_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.ledger_parsed(
            participant_count=participant_count,
            transaction_count=transaction_count,
            correlation_id=correlation_id,
        ))

    def log_fair_shares_computed(
        self,
        total_cents: int,
        group_count: int,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.fair_shares_computed(
            total_cents=total_cents,
            group_count=group_count,
            correlation_id=correlation_id,
        ))

    def log_settlements_computed(self, suggestion_count: int, correlation_id: UUID) -> None:
        self.log(AuditEventBuilder.settlements_computed(
            suggestion_count=suggestion_count,
            correlation_id=correlation_id,
        ))

    def log_settlement_computation_failed(self, error_message: str, correlation_id: UUID) -> None:
        """Log settlement suggestions degrading to an empty list."""
        self.log(AuditEventBuilder.settlement_computation_failed(
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_settlement_recorded(
        self,
        from_key: str,
        to_key: str,
        amount_cents: int,
        correlation_id: UUID,
    ) -> None:
        """Log a settlement the user marked as paid."""
        self.log(AuditEventBuilder.settlement_recorded(
            from_key=from_key,
            to_key=to_key,
            amount_cents=amount_cents,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of an evaluation and pass it through every
    event that evaluation emits.
    """
    return uuid4()
