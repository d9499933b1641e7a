"""Custom exception hierarchy for the LED panel.

Provides structured error handling with severity levels and context,
plus the shared bounds check used by every light-addressing call.
"""

from enum import Enum
from typing import Any


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and logging."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class LEDPanelError(Exception):
    """Base exception for all LED panel errors.

    Attributes:
        message: Human-readable error message
        details: Additional context as key-value pairs
        severity: Error severity level
    """

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "severity": self.severity.value,
            "details": self.details,
        }


class ConfigurationError(LEDPanelError):
    """Configuration validation or loading error.

    Raised when:
    - Config file is malformed
    - Values fail validation
    - A glyph table has rows of the wrong count or width
    """

    pass


class IndexOutOfBoundsError(LEDPanelError, IndexError):
    """LED index outside the grid boundaries.

    Always an integration error (for example a panel length that does not
    match the surface), never a recoverable input condition.
    """

    severity = ErrorSeverity.CRITICAL

    def __init__(self, index: int, bound: int) -> None:
        super().__init__(
            "LED index outside boundaries",
            details={"index": index, "bound": bound},
        )
        self.index = index
        self.bound = bound


class GlyphNotFoundError(LEDPanelError, LookupError):
    """The glyph table has no entry for a character.

    Raised for the whole render request; a missing glyph is never drawn
    as blank since that would shift the centering arithmetic.
    """

    def __init__(self, char: str) -> None:
        super().__init__(
            "No glyph for character",
            details={"char": repr(char), "code": ord(char)},
        )
        self.char = char
        self.code = ord(char)


class AnimationError(LEDPanelError):
    """Animation engine misuse.

    Raised when:
    - Interval is negative
    - A timed mode is started without a running event loop
    """

    severity = ErrorSeverity.WARNING


def assert_boundaries(idx: int, bound: int) -> None:
    """Check that ``0 <= idx < bound``.

    Raises:
        IndexOutOfBoundsError: If the index falls outside the bound
    """
    if idx < 0 or idx >= bound:
        raise IndexOutOfBoundsError(idx, bound)
