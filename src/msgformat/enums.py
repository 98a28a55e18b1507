"""Enumerations for msgformat type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PluralCategory(StrEnum):
    """CLDR grammatical-number category.

    Not every locale uses every category. OTHER is the universal fallback:
    every classifier can return it, and every plural select is expected to
    define a branch for it.

    StrEnum provides automatic string conversion: str(PluralCategory.ONE) == "one"
    """

    ZERO = "zero"
    """Zero form (Latvian 0, 10, 11-19; Arabic 0)."""

    ONE = "one"
    """Singular form in English (1)."""

    TWO = "two"
    """Dual form (Arabic, Welsh, Slovenian)."""

    FEW = "few"
    """Paucal form; range depends on locale (Polish 2-4)."""

    MANY = "many"
    """Form for larger counts; range depends on locale (Polish 5-21)."""

    OTHER = "other"
    """Catch-all form. Plural form in English."""


class PluralType(StrEnum):
    """Kind of plural rule used by a plural select.

    StrEnum provides automatic string conversion: str(PluralType.ORDINAL) == "ordinal"
    """

    CARDINAL = "cardinal"
    """Counting: 1 item, 2 items (ICU `plural`)."""

    ORDINAL = "ordinal"
    """Ranking: 1st, 2nd, 3rd (ICU `selectordinal`)."""


class ValueKind(StrEnum):
    """Variant tag of a wrapped argument value."""

    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    FORMATTABLE = "formattable"
    """Any other caller object (rendered via Formattable protocol or str())."""


class FormatHint(StrEnum):
    """Formatter hint attached to an argument reference.

    Mirrors the ICU argument types: {n, number}, {d, date}, {t, time}.
    """

    NUMBER = "number"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


class MissingArgumentPolicy(StrEnum):
    """How an absent argument is rendered.

    The error is collected under both policies; only the output differs.
    """

    PLACEHOLDER = "placeholder"
    """Render a visible marker such as {name}."""

    SKIP = "skip"
    """Render nothing for the missing argument."""


class ArgumentContext(StrEnum):
    """Where an argument is referenced inside a message.

    StrEnum provides automatic string conversion: str(ArgumentContext.PLURAL) == "plural"
    """

    PATTERN = "pattern"
    """Interpolated value: Hello, {name}!"""

    PLURAL = "plural"
    """Plural or selectordinal discriminant: {count, plural, ...}"""

    SELECT = "select"
    """Select discriminant: {gender, select, ...}"""


__all__ = [
    "ArgumentContext",
    "FormatHint",
    "MissingArgumentPolicy",
    "PluralCategory",
    "PluralType",
    "ValueKind",
]
