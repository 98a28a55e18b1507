"""Message introspection: which arguments a message reads, and how.

Lets callers check, before formatting, that they supply every argument a
message needs, and that numeric arguments feed plurals while string
arguments feed selects.

Key features:
- Frozen dataclasses with slots for results
- Depth limiting via MessageVisitor to survive adversarial trees
- Per-message cache keyed weakly on the Message

Python 3.13+.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass

from msgformat.constants import MAX_DEPTH
from msgformat.enums import ArgumentContext
from msgformat.runtime.message import Message
from msgformat.runtime.parts import ArgumentRef, Placeholder, PluralSelect, Select
from msgformat.runtime.value import ArgumentKey
from msgformat.visitor import MessageVisitor

__all__ = [
    "ArgumentInfo",
    "IntrospectionVisitor",
    "MessageIntrospection",
    "clear_introspection_cache",
    "extract_arguments",
    "introspect_message",
]

# Concurrent writes may race; the worst case is a redundant computation.
_introspection_cache: weakref.WeakKeyDictionary[Message, MessageIntrospection] = (
    weakref.WeakKeyDictionary()
)


def clear_introspection_cache() -> None:
    """Clear the introspection cache.

    Entries also disappear on their own when the Message is garbage collected.
    """
    _introspection_cache.clear()


@dataclass(frozen=True, slots=True)
class ArgumentInfo:
    """One argument reference and the role it plays."""

    key: ArgumentKey
    context: ArgumentContext


@dataclass(frozen=True, slots=True)
class MessageIntrospection:
    """Immutable summary of a message's argument usage.

    Attributes:
        arguments: Every (key, context) pair referenced anywhere in the tree
        has_selectors: True if the message contains plural or select parts
        has_placeholders: True if any '#' placeholder appears
        max_depth: Deepest branch nesting found (0 for flat messages)
    """

    arguments: frozenset[ArgumentInfo]
    has_selectors: bool
    has_placeholders: bool
    max_depth: int

    def get_argument_keys(self) -> frozenset[ArgumentKey]:
        """All argument names and indices the message reads."""
        return frozenset(info.key for info in self.arguments)

    def requires_argument(self, key: ArgumentKey) -> bool:
        """Check if the message reads a specific argument."""
        return any(info.key == key for info in self.arguments)

    def keys_in_context(self, context: ArgumentContext) -> frozenset[ArgumentKey]:
        """Argument keys used in one role (e.g. every plural discriminant)."""
        return frozenset(info.key for info in self.arguments if info.context is context)


class IntrospectionVisitor(MessageVisitor):
    """Visitor collecting argument references with their usage context."""

    __slots__ = ("arguments", "deepest", "has_placeholders", "has_selectors")

    def __init__(self, *, max_depth: int = MAX_DEPTH) -> None:
        super().__init__(max_depth=max_depth)
        self.arguments: set[ArgumentInfo] = set()
        self.has_selectors = False
        self.has_placeholders = False
        self.deepest = 0

    def visit_ArgumentRef(self, node: ArgumentRef) -> None:
        self.arguments.add(ArgumentInfo(node.key, ArgumentContext.PATTERN))

    def visit_Placeholder(self, node: Placeholder) -> None:  # noqa: ARG002 - dispatch signature
        self.has_placeholders = True

    def visit_PluralSelect(self, node: PluralSelect) -> None:
        self.arguments.add(ArgumentInfo(node.key, ArgumentContext.PLURAL))
        self._visit_selector(node)

    def visit_Select(self, node: Select) -> None:
        self.arguments.add(ArgumentInfo(node.key, ArgumentContext.SELECT))
        self._visit_selector(node)

    def _visit_selector(self, node: PluralSelect | Select) -> None:
        self.has_selectors = True
        self.deepest = max(self.deepest, self.depth + 1)
        self.generic_visit(node)


def introspect_message(message: Message, *, use_cache: bool = True) -> MessageIntrospection:
    """Introspect a message and extract its argument usage.

    Args:
        message: Message to analyze
        use_cache: Reuse the result for a previously introspected message

    Returns:
        MessageIntrospection for the message

    Raises:
        TypeError: If message is not a Message
        DepthLimitExceededError: If the tree nests deeper than MAX_DEPTH

    Example:
        >>> info = introspect_message(Message.of("Hi ", ArgumentRef("name")))
        >>> info.get_argument_keys()
        frozenset({'name'})
    """
    if not isinstance(message, Message):
        msg = f"Expected Message, got {type(message).__name__}"
        raise TypeError(msg)

    if use_cache:
        cached = _introspection_cache.get(message)
        if cached is not None:
            return cached

    visitor = IntrospectionVisitor()
    visitor.visit(message)
    result = MessageIntrospection(
        arguments=frozenset(visitor.arguments),
        has_selectors=visitor.has_selectors,
        has_placeholders=visitor.has_placeholders,
        max_depth=visitor.deepest,
    )

    if use_cache:
        _introspection_cache[message] = result
    return result


def extract_arguments(message: Message) -> frozenset[ArgumentKey]:
    """Extract the argument keys a message reads (simplified API).

    Example:
        >>> extract_arguments(greeting)
        frozenset({'name'})
    """
    return introspect_message(message).get_argument_keys()
