"""
Main Orchestrator for Splitwiser

This module ties together all the components and defines the
end-to-end flows for:
1. Evaluation (text -> validate -> ledger -> fair shares -> settlements)
2. Settling (suggestion -> payment line added to the text)

DESIGN DECISION: The orchestrator enforces the boundaries:
- No ledger is built from a document with validation issues
- No settlement is recorded if it would make the document invalid
- Every step is audited

The calculation modules stay pure; everything with side effects (audit
events, the correlation ID of a run) lives here.
"""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from splitwiser.audit import AuditLogger, create_correlation_id
from splitwiser.audit.logger import AuditSink
from splitwiser.calculation import FairShareAllocator, SettlementEngine, fair_shares, settlements
from splitwiser.config import ParserSettings
from splitwiser.models.ledger import (
    Ledger,
    SettlementSuggestion,
    ValidationIssue,
    cents_to_decimal,
)
from splitwiser.parsing import build_ledger, split_lines
from splitwiser.reports import build_summary, record_settlement
from splitwiser.validation import DocumentValidator, LedgerValidationError, validate


def parse(text: str, settings: Optional[ParserSettings] = None) -> Ledger:
    """
    Validate text and build its Ledger.

    Raises LedgerValidationError carrying every issue when the document
    has any.
    """
    issues = validate(text)
    if issues:
        raise LedgerValidationError(issues)
    return build_ledger(text, settings)


class Evaluation(BaseModel):
    """Everything shown for one version of the input text."""

    text: str
    issues: list[ValidationIssue] = Field(default_factory=list)
    ledger: Optional[Ledger] = None
    fair_shares: dict[str, Decimal] = Field(default_factory=dict)
    suggestions: list[SettlementSuggestion] = Field(default_factory=list)
    total_cents: int = 0
    summary: str = ""

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def total(self) -> Decimal:
        return cents_to_decimal(self.total_cents)


class EvaluationFlow:
    """
    Orchestrates one evaluation of the input text.

    Flow:
    1. Validate -> issues stop the flow (nothing else is computed)
    2. Parse -> Ledger
    3. Allocate -> fair shares
    4. Settle -> suggestions (a failure is audited and yields none)
    5. Summarise -> shareable text
    """

    def __init__(
        self,
        validator: Optional[DocumentValidator] = None,
        allocator: Optional[FairShareAllocator] = None,
        engine: Optional[SettlementEngine] = None,
        audit_logger: Optional[AuditLogger] = None,
        locale: Optional[str] = None,
    ):
        self._locale = locale
        self._validator = validator or DocumentValidator(locale)
        self._allocator = allocator or FairShareAllocator()
        self._engine = engine or SettlementEngine(allocator=self._allocator)
        self._audit_logger = audit_logger

    def evaluate(self, text: str, correlation_id: Optional[UUID] = None) -> Evaluation:
        correlation_id = correlation_id or create_correlation_id()

        issues = self._validator.validate(text)
        if issues:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    issues=[issue.model_dump(mode="json") for issue in issues],
                    correlation_id=correlation_id,
                )
            return Evaluation(text=text, issues=issues)

        if self._audit_logger:
            self._audit_logger.log_document_validated(
                line_count=len(split_lines(text)),
                correlation_id=correlation_id,
            )

        ledger = build_ledger(text)
        if self._audit_logger:
            self._audit_logger.log_ledger_parsed(
                participant_count=len(ledger.participants),
                transaction_count=len(ledger.transactions),
                correlation_id=correlation_id,
            )

        allocation = self._allocator.allocate(ledger)
        if self._audit_logger:
            self._audit_logger.log_fair_shares_computed(
                total_cents=allocation.total_cents,
                group_count=len(allocation.groups),
                correlation_id=correlation_id,
            )

        # Suggestions are a convenience: a failure leaves the fair shares usable
        try:
            suggestions = self._engine.compute(ledger, allocation)
        except Exception as e:
            if self._audit_logger:
                self._audit_logger.log_settlement_computation_failed(
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            suggestions = []
        else:
            if self._audit_logger:
                self._audit_logger.log_settlements_computed(
                    suggestion_count=len(suggestions),
                    correlation_id=correlation_id,
                )

        return Evaluation(
            text=text,
            ledger=ledger,
            fair_shares={
                key: cents_to_decimal(cents)
                for key, cents in allocation.owed_cents.items()
            },
            suggestions=suggestions,
            total_cents=allocation.total_cents,
            summary=build_summary(ledger, self._locale, allocation, suggestions),
        )

    def settle(
        self,
        text: str,
        suggestion: SettlementSuggestion,
        correlation_id: Optional[UUID] = None,
    ) -> str:
        """
        Record a suggested payment in the text.

        Returns the new text, or the original text if the payer is not in
        it or the result would not validate.
        """
        correlation_id = correlation_id or create_correlation_id()

        ledger = parse(text)
        new_text = record_settlement(text, suggestion, ledger, self._locale)

        if new_text == text:
            return text

        issues = self._validator.validate(new_text)
        if issues:
            if self._audit_logger:
                self._audit_logger.log_error(
                    error_type="settlement_rejected",
                    error_message=issues[0].message,
                    details={"from": suggestion.from_key, "to": suggestion.to_key},
                    correlation_id=correlation_id,
                )
            return text

        if self._audit_logger:
            self._audit_logger.log_settlement_recorded(
                from_key=suggestion.from_key,
                to_key=suggestion.to_key,
                amount_cents=suggestion.amount_cents,
                correlation_id=correlation_id,
            )

        return new_text


def create_app_components(
    sink: Optional[AuditSink] = None,
    locale: Optional[str] = None,
) -> EvaluationFlow:
    """
    Factory function to create all application components.

    Args:
        sink: Optional callable receiving every audit event.
              If None, events are only logged locally.
        locale: Language for messages and amounts.
                If None, the configured locale is used.
    """
    audit_logger = AuditLogger(sink)
    return EvaluationFlow(audit_logger=audit_logger, locale=locale)


__all__ = [
    "Evaluation",
    "EvaluationFlow",
    "create_app_components",
    "fair_shares",
    "parse",
    "settlements",
    "validate",
]
