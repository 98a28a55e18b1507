"""Argument collection for one formatting call.

Args is an immutable, insertion-ordered mapping from argument key (name or
positional index) to Value. It is built once per call, then only read by
every message part during the pass.

Building follows a chained style:

    >>> args = arg("name", "Jacob").arg("place", "the store")
    >>> args.get("place")
    Value(kind=<ValueKind.STRING: 'string'>, raw='the store')

Each .arg() returns a new Args; the receiver is never modified, so a
partially built Args can be shared freely.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import ItemsView, Iterator, Mapping
from types import MappingProxyType

from .value import ArgumentKey, Value, check_argument_key

__all__ = ["Args", "arg"]


class Args:
    """Immutable ordered collection of named and positional arguments.

    Keys are unique. Lookup is O(1) via an internal read-only dict; the
    dict's insertion order is the argument order.

    Thread Safety:
        Immutable after construction; safe to share across concurrent
        formatting calls.
    """

    __slots__ = ("_values",)

    def __init__(self, entries: Mapping[ArgumentKey, object] | None = None) -> None:
        """Create Args from a mapping of keys to raw values.

        Args:
            entries: Keys (str names or non-negative int indices) to values.
                Values are wrapped with Value.of().

        Raises:
            TypeError: If a key is not str or int
            ValueError: If a positional index is negative
        """
        values: dict[ArgumentKey, Value] = {}
        for key, raw in (entries or {}).items():
            values[check_argument_key(key)] = Value.of(raw)
        self._values: MappingProxyType[ArgumentKey, Value] = MappingProxyType(values)

    @classmethod
    def from_mapping(cls, mapping: Mapping[ArgumentKey, object]) -> Args:
        """Create Args from a mapping (e.g. a dict of keyword arguments)."""
        return cls(mapping)

    @classmethod
    def positional(cls, *values: object) -> Args:
        """Create Args keyed by position: Args.positional("a", 3) -> {0: "a", 1: 3}."""
        return cls(dict(enumerate(values)))

    @classmethod
    def coerce(cls, args: Args | Mapping[ArgumentKey, object] | None) -> Args:
        """Accept Args, a plain mapping, or None (no arguments)."""
        if isinstance(args, Args):
            return args
        return cls(args)

    def arg(self, key: ArgumentKey, value: object) -> Args:
        """Return a new Args with one more argument appended.

        Raises:
            ValueError: If key is already present
        """
        key = check_argument_key(key)
        if key in self._values:
            msg = f"Duplicate argument key: {key!r}"
            raise ValueError(msg)
        extended = Args.__new__(Args)
        extended._values = MappingProxyType({**self._values, key: Value.of(value)})
        return extended

    def get(self, key: ArgumentKey) -> Value | None:
        """Look up an argument. Returns None (not an error) when absent."""
        return self._values.get(key)

    def items(self) -> ItemsView[ArgumentKey, Value]:
        """(key, Value) pairs in insertion order."""
        return self._values.items()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ArgumentKey]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Args):
            return NotImplemented
        return list(self._values.items()) == list(other._values.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{key!r}: {value.raw!r}" for key, value in self._values.items())
        return f"Args({{{inner}}})"


def arg(key: ArgumentKey, value: object) -> Args:
    """Start an argument chain: arg("count", 3).arg("name", "Ada")."""
    return Args().arg(key, value)
