"""Custom exceptions for section extraction."""

from typing import Any


class SectionError(Exception):
    """Base exception for all section extraction errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "LENGTH_MISMATCH").
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize SectionError.

        Args:
            message: Human-readable error description.
            code: Short error code string.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"[{self.code}] {self.message} (details: {self.details})"
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        """Return repr string."""
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r}, details={self.details!r})"


class SectionConfigError(SectionError):
    """Raised when section extraction configuration is invalid.

    Common codes:
        - INVALID_CONFIG: A configuration parameter is out of range.
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_CONFIG",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class SectionRuntimeError(SectionError):
    """Raised when section extraction fails on its inputs.

    Common codes:
        - INVALID_SHAPE: Labels are not a single column.
        - LENGTH_MISMATCH: Labels and timestamps differ in length, or a
          mask does not match its sequence.
        - SENTINEL_COLLISION: A sequence already holds the sentinel value.
        - INCONSISTENT_BOUNDARIES: Onset/offset bookkeeping disagrees.
    """
    pass
