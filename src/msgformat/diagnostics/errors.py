"""Exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Formatting collects these errors instead of raising them to the caller:
a single bad argument degrades to a visible placeholder, never a failed
message.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, ErrorCategory

__all__ = [
    "DepthLimitExceededError",
    "FormattingError",
    "MessageFormatError",
    "MissingArgumentError",
    "NoMatchingBranchError",
    "TypeMismatchError",
    "UnknownLocaleError",
]


class MessageFormatError(Exception):
    """Base exception for all msgformat errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
        category: Broad error class for log aggregation
    """

    category: ErrorCategory = ErrorCategory.STRUCTURE

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize MessageFormatError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class MissingArgumentError(MessageFormatError):
    """Referenced argument name/index absent from Args.

    Fallback: the part renders {name}, or nothing under the SKIP policy.
    """

    category = ErrorCategory.REFERENCE


class TypeMismatchError(MessageFormatError, TypeError):
    """Argument present but of a kind the part cannot use.

    Raised by the fallible Value accessors. Also a TypeError so callers
    using Value directly can catch it as such.

    Fallback: the part renders its placeholder.
    """

    category = ErrorCategory.TYPE


class UnknownLocaleError(MessageFormatError, ValueError):
    """No registered classifier or CLDR data for a locale.

    Raised by Context.create_or_raise(). Context.create() never raises it and
    records the same UNKNOWN_LOCALE diagnostic instead. Also a ValueError so
    callers can catch it as such.
    """

    category = ErrorCategory.LOCALE


class NoMatchingBranchError(MessageFormatError):
    """Select/plural has no branch for the discriminant and no 'other'.

    Fallback: the select renders nothing.
    """

    category = ErrorCategory.SELECTION


class DepthLimitExceededError(MessageFormatError):
    """Maximum branch nesting depth exceeded.

    Indicates a malformed or adversarial programmatically built tree.
    Fallback: the over-deep branch renders nothing.
    """

    category = ErrorCategory.STRUCTURE


class FormattingError(MessageFormatError):
    """Raised when locale-aware formatting fails.

    The error carries a fallback_value that should be used in the output
    when the formatting fails, so the error is collected while the output
    still contains usable content.

    Attributes:
        fallback_value: String to use in output when formatting fails
    """

    category = ErrorCategory.FORMATTING

    def __init__(self, message: str | Diagnostic, fallback_value: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Error message string OR Diagnostic object
            fallback_value: Value to use in output when formatting fails
        """
        super().__init__(message)
        self.fallback_value = fallback_value
