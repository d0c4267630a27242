"""Exceptions raised by the decline fitting pipeline.

All errors derive from ValueError so callers that already guard fitting
calls with ``except ValueError`` keep working.
"""


class DeclineFitError(ValueError):
    """Base exception for declinefit errors."""

    def __init__(self, message: str, suggestion: str | None = None):
        """Initialize error.

        Args:
            message: Primary error message
            suggestion: Optional hint for fixing the input
        """
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def __str__(self) -> str:
        if self.suggestion:
            return f"{self.message}. {self.suggestion}"
        return self.message


class ParseError(DeclineFitError):
    """No valid production records could be read from the input."""


class InsufficientDataError(DeclineFitError):
    """Too few positive-rate points for the requested fit."""


class DegenerateDataError(DeclineFitError):
    """Regression input has no spread in time."""
