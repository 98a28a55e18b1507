"""Argument values for message formatting.

Defines the types that carry caller data into a formatting pass:
    - Value: Closed tagged wrapper over the argument kinds the engine handles
    - Formattable: Protocol for caller objects with locale-aware rendering
    - ArgumentKey: Name or positional index under which a Value is stored

A Value keeps the caller's object as-is (no copy) and exposes fallible
accessors, so message parts read exactly the kind they need and report a
TypeMismatchError otherwise.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, TypeAlias, Protocol, runtime_checkable

from msgformat.diagnostics import ErrorTemplate, TypeMismatchError
from msgformat.enums import ValueKind

if TYPE_CHECKING:
    from .context import Context

__all__ = [
    "ArgumentKey",
    "Formattable",
    "Value",
    "check_argument_key",
]

ArgumentKey: TypeAlias = "str | int"


def check_argument_key(key: object) -> ArgumentKey:
    """Validate an argument key: a str name or a non-negative int index.

    Raises:
        TypeError: If key is not str or int (bool is rejected)
        ValueError: If an int index is negative
    """
    # bool is an int subclass; True/False are not positional indices
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        msg = f"Argument key must be str or int, got {type(key).__name__}"
        raise TypeError(msg)
    if isinstance(key, int) and key < 0:
        msg = f"Positional argument index must be >= 0, got {key}"
        raise ValueError(msg)
    return key


@runtime_checkable
class Formattable(Protocol):
    """Protocol for caller objects that render themselves per locale.

    Objects without this method are rendered with str().
    """

    def format_for(self, context: Context) -> str:
        ...  # pragma: no cover  # Protocol stub - not executable


_NUMERIC_KINDS: frozenset[ValueKind] = frozenset(
    {ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.DECIMAL}
)


@dataclass(frozen=True, slots=True)
class Value:
    """Immutable, type-tagged wrapper around one argument value.

    Use Value.of() to construct; it picks the kind from the Python type.
    bool and None are opaque (FORMATTABLE): bool is an int subclass, but a
    flag is not a count and must not drive plural selection.

    Attributes:
        kind: Variant tag
        raw: The caller's object, stored by reference

    Example:
        >>> Value.of(3).kind
        <ValueKind.INTEGER: 'integer'>
        >>> Value.of("Ada").as_str()
        'Ada'
        >>> Value.of("Ada").as_number()
        Traceback (most recent call last):
            ...
        msgformat.diagnostics.errors.TypeMismatchError: Value is string, expected number
    """

    kind: ValueKind
    raw: object

    @classmethod
    def of(cls, raw: object) -> Value:
        """Wrap a caller value, choosing its kind from the Python type."""
        match raw:
            case Value():
                return raw
            case bool() | None:
                return cls(ValueKind.FORMATTABLE, raw)
            case int():
                return cls(ValueKind.INTEGER, raw)
            case float():
                return cls(ValueKind.FLOAT, raw)
            case Decimal():
                return cls(ValueKind.DECIMAL, raw)
            case str():
                return cls(ValueKind.STRING, raw)
            case _:
                return cls(ValueKind.FORMATTABLE, raw)

    @property
    def is_number(self) -> bool:
        """True for INTEGER, FLOAT and DECIMAL values."""
        return self.kind in _NUMERIC_KINDS

    @property
    def is_string(self) -> bool:
        """True for STRING values."""
        return self.kind is ValueKind.STRING

    def as_number(self) -> int | float | Decimal:
        """Return the numeric value.

        Raises:
            TypeMismatchError: If the value is not numeric
        """
        if self.kind in _NUMERIC_KINDS:
            return self.raw  # type: ignore[return-value]
        raise TypeMismatchError(ErrorTemplate.type_mismatch(None, "number", self.kind))

    def as_integer(self) -> int:
        """Return the value as int.

        Integral floats and Decimals (3.0, Decimal("3")) are accepted.

        Raises:
            TypeMismatchError: If the value is not an integral number
        """
        number = self.as_number()
        if isinstance(number, int):
            return number
        try:
            if number == int(number):
                return int(number)
        except (OverflowError, ValueError):
            pass
        raise TypeMismatchError(ErrorTemplate.type_mismatch(None, "integer", self.kind))

    def as_str(self) -> str:
        """Return the string value.

        Raises:
            TypeMismatchError: If the value is not a string
        """
        if self.kind is ValueKind.STRING:
            return self.raw  # type: ignore[return-value]
        raise TypeMismatchError(ErrorTemplate.type_mismatch(None, "string", self.kind))

    def as_formattable(self) -> object:
        """Return the opaque caller object.

        Raises:
            TypeMismatchError: If the value is a number or string
        """
        if self.kind is ValueKind.FORMATTABLE:
            return self.raw
        raise TypeMismatchError(ErrorTemplate.type_mismatch(None, "formattable", self.kind))

    def __str__(self) -> str:
        """Locale-independent rendering (used only outside a formatting pass)."""
        if self.raw is None:
            return ""
        if isinstance(self.raw, bool):
            return "true" if self.raw else "false"
        return str(self.raw)
