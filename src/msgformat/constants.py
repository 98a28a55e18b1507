"""Shared constants for msgformat.

Centralized configuration constants used across the diagnostics, runtime,
and validation layers. Placing them here avoids circular imports and keeps a
single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for formatting and tree traversal
- Locale defaults: Fallback locale and cache bounds
- Fallback strings: Visible markers rendered in place of failed parts

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Locale defaults
    "DEFAULT_LOCALE",
    "MAX_LOCALE_CACHE_SIZE",
    # Selection
    "OTHER_KEY",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_ARGUMENT",
    "FALLBACK_PLURAL",
    "FALLBACK_SELECT",
    "FALLBACK_PLACEHOLDER",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum nesting depth of plural/select branches.
# Used by: resolver (nested branch formatting), visitor, validation.
# Message trees are built bottom-up by producers and are finite, but a
# programmatically generated tree can still be deep enough to exhaust the
# Python stack. 100 levels is far beyond any legitimate message.
MAX_DEPTH: int = 100

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used when none is supplied and when an unknown locale falls back.
DEFAULT_LOCALE: str = "en"

# Maximum cached Babel Locale objects (see locale_utils.get_babel_locale).
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# SELECTION
# ============================================================================

# Catch-all branch key for Select (matches PluralCategory.OTHER's value).
OTHER_KEY: str = "other"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Unified fallback string patterns for parts that fail to format.
# These are format strings - use .format(name=...).

# Part of unknown type (programmatic misuse)
FALLBACK_INVALID: str = "{???}"

FALLBACK_ARGUMENT: str = "{{{name}}}"  # e.g., {name}
FALLBACK_PLURAL: str = "{{{name}, {kind}}}"  # e.g., {count, plural}
FALLBACK_SELECT: str = "{{{name}, select}}"  # e.g., {gender, select}

# ICU '#' rendered outside a plural branch
FALLBACK_PLACEHOLDER: str = "#"
