"""Document validation package."""

from splitwiser.validation.validator import (
    DocumentValidator,
    LedgerValidationError,
    SplitwiserError,
    validate,
)

__all__ = [
    "DocumentValidator",
    "LedgerValidationError",
    "SplitwiserError",
    "validate",
]
