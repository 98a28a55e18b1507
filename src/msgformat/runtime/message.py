"""Message: an immutable, ordered sequence of message parts.

Messages are built once (by hand, by a catalog loader, or by a parser living
outside this package) and then formatted any number of times, concurrently,
against different arguments and contexts.

    >>> greeting = Message.of("Hello, ", ArgumentRef("name"), "!")
    >>> greeting.format({"name": "Ada"})
    'Hello, Ada!'

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from .args import Args
from .parts import Literal, MessagePart
from .resolver import MessageResolver

if TYPE_CHECKING:
    from msgformat.diagnostics import MessageFormatError

    from .context import Context, TextSink
    from .value import ArgumentKey

__all__ = ["Message", "format_message", "write_message"]

MessageArgs: TypeAlias = "Args | Mapping[ArgumentKey, object] | None"


def _default_context() -> Context:
    from .context import Context  # noqa: PLC0415 - circular import

    return Context.default()


@dataclass(frozen=True, slots=True, weakref_slot=True)
class Message:
    """Ordered, immutable tuple of parts.

    Equality and hashing are structural, so identical messages can be used as
    cache or dictionary keys.

    Attributes:
        parts: Message parts in output order
    """

    parts: tuple[MessagePart, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def of(cls, *parts: MessagePart | str) -> Message:
        """Build a message from parts; plain strings become Literal parts."""
        return cls(tuple(Literal(part) if isinstance(part, str) else part for part in parts))

    @classmethod
    def text(cls, text: str) -> Message:
        """A message consisting of one literal."""
        return cls((Literal(text),))

    def format(self, args: MessageArgs = None, context: Context | None = None) -> str:
        """Format to a string, discarding errors.

        Failed parts render as visible placeholders ({name}, {count, plural});
        use format_with_errors() to inspect what went wrong.

        Args:
            args: Args, or a mapping of names/indices to raw values
            context: Formatting context (default: English)

        Returns:
            Formatted text
        """
        result, _errors = self.format_with_errors(args, context)
        return result

    def format_with_errors(
        self, args: MessageArgs = None, context: Context | None = None
    ) -> tuple[str, tuple[MessageFormatError, ...]]:
        """Format to a string and return the collected errors.

        Never raises for malformed arguments, unknown locales or missing
        branches.

        Returns:
            Tuple of (formatted_string, errors)
        """
        resolver = MessageResolver(context or _default_context())
        return resolver.resolve(self, Args.coerce(args))

    def write(
        self,
        sink: TextSink,
        args: MessageArgs = None,
        context: Context | None = None,
    ) -> tuple[MessageFormatError, ...]:
        """Stream the formatted message into sink, fragment by fragment.

        Args:
            sink: Object with write(str), e.g. io.StringIO or an open text file
            args: Args, or a mapping of names/indices to raw values
            context: Formatting context (default: English)

        Returns:
            Errors collected during formatting

        Raises:
            Whatever sink.write raises (e.g. OSError); nothing else
        """
        resolver = MessageResolver(context or _default_context())
        return resolver.write(self, Args.coerce(args), sink.write)

    def __str__(self) -> str:
        """Locale-independent preview with English defaults."""
        return self.format()


def format_message(context: Context, message: Message, /, **kwargs: object) -> str:
    """Format message with keyword arguments.

    Example:
        >>> format_message(Context.create("en"), greeting, name="Ada")
        'Hello, Ada!'
    """
    return message.format(Args.from_mapping(kwargs), context)


def write_message(
    context: Context, message: Message, sink: TextSink, /, **kwargs: object
) -> tuple[MessageFormatError, ...]:
    """Stream message into sink with keyword arguments; return the errors."""
    return message.write(sink, Args.from_mapping(kwargs), context)
