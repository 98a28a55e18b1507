"""Diagnostic system for message formatting errors.

Provides structured error diagnostics with codes, categories and hints.
Inspired by Rust compiler diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, ErrorCategory
from .errors import (
    DepthLimitExceededError,
    FormattingError,
    MessageFormatError,
    MissingArgumentError,
    NoMatchingBranchError,
    TypeMismatchError,
    UnknownLocaleError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationIssue, ValidationResult

__all__ = [
    "DepthLimitExceededError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorCategory",
    "ErrorTemplate",
    "FormattingError",
    "MessageFormatError",
    "MissingArgumentError",
    "NoMatchingBranchError",
    "OutputFormat",
    "TypeMismatchError",
    "UnknownLocaleError",
    "ValidationIssue",
    "ValidationResult",
]
