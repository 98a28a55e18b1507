"""Diagnostic codes, error categories and the Diagnostic record.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorCategory",
]


class ErrorCategory(StrEnum):
    """Error categorization for formatting errors.

    Inherits from ``StrEnum`` so log aggregation receives plain strings
    (``"reference"``, ``"type"``, etc.).

    Categories:
        REFERENCE: Argument referenced by a part is absent from Args
        TYPE: Argument present but of the wrong kind for the part
        LOCALE: Locale has no registered data; a fallback was used
        SELECTION: Plural/select found no branch to format
        FORMATTING: Locale-aware number/date formatting failed
        STRUCTURE: Message tree is malformed (depth, placement)
    """

    REFERENCE = "reference"
    TYPE = "type"
    LOCALE = "locale"
    SELECTION = "selection"
    FORMATTING = "formatting"
    STRUCTURE = "structure"


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Argument errors (missing, mismatched)
        2000-2999: Resolution errors (selection, formatting, depth)
        3000-3999: Locale errors
        5000-5099: Validation errors (producer-side construction checks)
        5100-5199: Validation warnings
    """

    # Argument errors (1000-1999)
    MISSING_ARGUMENT = 1001
    TYPE_MISMATCH = 1002

    # Resolution errors (2000-2999)
    NO_MATCHING_BRANCH = 2001
    FORMATTING_FAILED = 2002
    MAX_DEPTH_EXCEEDED = 2003
    PLACEHOLDER_OUTSIDE_PLURAL = 2004
    UNKNOWN_PART = 2005
    INVALID_PLURAL_CATEGORY = 2006

    # Locale errors (3000-3999)
    UNKNOWN_LOCALE = 3001

    # Validation errors (5000-5099)
    VALIDATION_MISSING_OTHER = 5001
    VALIDATION_DEPTH_EXCEEDED = 5002

    # Validation warnings (5100-5199)
    VALIDATION_PLACEHOLDER_OUTSIDE_PLURAL = 5100
    VALIDATION_UNUSED_CATEGORY = 5101


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """What went wrong in one part of a message, and where.

    Carried by every collected MessageFormatError and ValidationIssue, so
    callers can branch on code and argument_name instead of parsing text.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        argument_name: Argument key that caused the error (str name or index)
        expected_type: Expected value kind for the argument
        received_type: Actual value kind received
        locale_code: Locale involved in the error, if any
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    argument_name: str | None = None
    expected_type: str | None = None
    received_type: str | None = None
    locale_code: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Render with the default (DETAILED) DiagnosticFormatter.

            error[TYPE_MISMATCH]: Argument 'count' is string, expected number
              = argument: count
              = expected: number
              = received: string
              = help: Pass a number value for 'count'
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
