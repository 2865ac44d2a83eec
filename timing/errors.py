"""Custom exceptions for timestamp handling."""

from typing import Any


class TimingError(Exception):
    """Base exception for all timestamp errors.

    Attributes:
        message: Human-readable error description.
        code: Short error code string (e.g., "NOT_STRICTLY_INCREASING").
        details: Optional dictionary with additional context.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
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


class TimestampValidationError(TimingError):
    """Raised when a timestamp vector violates a precondition.

    Common codes:
        - INVALID_SHAPE: Input is not a single column / 1-D vector.
        - TOO_SHORT: Fewer samples than the operation needs.
        - NOT_STRICTLY_INCREASING: Consecutive differences are not all > 0
          (this includes NaN entries).
    """
    pass
