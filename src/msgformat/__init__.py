"""msgformat - Locale-aware message formatting with ICU plural and select rules.

Formats pre-built message trees (literals, argument references, plural and
select branches) against caller arguments under a locale. Formatting is
deterministic, never raises for malformed arguments, and every object it
reads is immutable, so messages and contexts can be shared across threads.

Public API:
    Message - Immutable sequence of parts; format(), format_with_errors(), write()
    Context - Locale, plural rules and number options for a formatting pass
    Args / arg - Immutable argument collection and its chained builder
    Value - Type-tagged argument value
    Literal, ArgumentRef, Placeholder, PluralSelect, Select - Message parts
    PluralRuleRegistry / classify - Plural category selection
    format_message / write_message - Keyword-argument conveniences

Exceptions:
    MessageFormatError - Base exception class
    MissingArgumentError, TypeMismatchError, NoMatchingBranchError,
    FormattingError, DepthLimitExceededError, UnknownLocaleError

Submodules:
    msgformat.introspection - Argument extraction and usage context
    msgformat.validation - Producer-side message checks
    msgformat.visitor - Message tree visitor base class
    msgformat.diagnostics - Error types, codes and validation results
"""

from .diagnostics import (
    DepthLimitExceededError,
    FormattingError,
    MessageFormatError,
    MissingArgumentError,
    NoMatchingBranchError,
    TypeMismatchError,
    UnknownLocaleError,
)
from .enums import (
    ArgumentContext,
    FormatHint,
    MissingArgumentPolicy,
    PluralCategory,
    PluralType,
    ValueKind,
)
from .runtime import (
    ArgumentRef,
    Args,
    Context,
    Formattable,
    Literal,
    Message,
    MessagePart,
    NumberOptions,
    Placeholder,
    PluralRuleRegistry,
    PluralSelect,
    Select,
    Value,
    arg,
    classify,
    format_message,
    write_message,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("msgformat")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentContext",
    "ArgumentRef",
    "Args",
    "Context",
    "DepthLimitExceededError",
    "FormatHint",
    "Formattable",
    "FormattingError",
    "Literal",
    "Message",
    "MessageFormatError",
    "MessagePart",
    "MissingArgumentError",
    "MissingArgumentPolicy",
    "NoMatchingBranchError",
    "NumberOptions",
    "Placeholder",
    "PluralCategory",
    "PluralRuleRegistry",
    "PluralSelect",
    "PluralType",
    "Select",
    "TypeMismatchError",
    "UnknownLocaleError",
    "Value",
    "ValueKind",
    "__version__",
    "arg",
    "classify",
    "format_message",
    "write_message",
]
