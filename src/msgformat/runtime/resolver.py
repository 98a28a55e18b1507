"""Message resolver: walks a message tree and emits text fragments.

Resolution is depth first, left to right. Every fragment goes straight to
an emit callable (list.append for format(), sink.write for write()), so the
streaming path never builds an intermediate string.

Errors never escape: each failure is collected in the pass's
ResolutionState and the failing part renders a readable fallback:

    {name}                 missing or unusable argument
    {count, plural}        plural whose argument is missing or not a number
    {count, selectordinal} same, ordinal
    {gender, select}       select whose argument is missing or not a string
    #                      placeholder outside any plural
    (nothing)              no matching branch, or nesting too deep

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, time
from typing import TYPE_CHECKING, TypeAlias

from msgformat.constants import (
    FALLBACK_ARGUMENT,
    FALLBACK_INVALID,
    FALLBACK_PLACEHOLDER,
    FALLBACK_PLURAL,
    FALLBACK_SELECT,
    OTHER_KEY,
)
from msgformat.diagnostics import (
    DepthLimitExceededError,
    ErrorTemplate,
    FormattingError,
    MessageFormatError,
    MissingArgumentError,
    NoMatchingBranchError,
    TypeMismatchError,
)
from msgformat.enums import FormatHint, MissingArgumentPolicy, PluralCategory, PluralType

from .parts import ArgumentRef, Literal, Placeholder, PluralSelect, Select
from .resolution_context import ResolutionState
from .value import Formattable, Value

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .args import Args
    from .context import Context
    from .message import Message
    from .parts import ExactKey, MessagePart
    from .plural_rules import PluralNumber
    from .value import ArgumentKey

__all__ = ["MessageResolver"]

logger = logging.getLogger(__name__)

Emit: TypeAlias = "Callable[[str], object]"

# Temporal types each hint accepts (datetime is a date subclass)
_TEMPORAL_TYPES: dict[FormatHint, tuple[type, ...]] = {
    FormatHint.DATE: (date,),
    FormatHint.TIME: (time, datetime),
    FormatHint.DATETIME: (date,),
}


def _plural_kind(plural_type: PluralType) -> str:
    return "selectordinal" if plural_type is PluralType.ORDINAL else "plural"


def _find_exact(exact_index: Mapping[ExactKey, Message], value: PluralNumber) -> Message | None:
    try:
        return exact_index.get(value)  # type: ignore[arg-type]
    except TypeError:  # signaling NaN Decimal is unhashable
        return None


def _apply_offset(number: PluralNumber, offset: int) -> PluralNumber:
    if not offset:
        return number
    try:
        return number - offset
    except ArithmeticError:  # signaling NaN Decimal; classifies as other
        return number


class MessageResolver:
    """Resolves a Message against Args under one Context.

    The resolver holds only the immutable Context; all per-pass state is
    created inside write(), so one resolver may serve concurrent calls.
    """

    __slots__ = ("context",)

    def __init__(self, context: Context) -> None:
        """Initialize resolver.

        Args:
            context: Locale, plural rules and options for every pass
        """
        self.context = context

    def resolve(self, message: Message, args: Args) -> tuple[str, tuple[MessageFormatError, ...]]:
        """Format message to a string with error collection.

        Returns:
            Tuple of (formatted_string, errors)
        """
        fragments: list[str] = []
        errors = self.write(message, args, fragments.append)
        return "".join(fragments), errors

    def write(self, message: Message, args: Args, emit: Emit) -> tuple[MessageFormatError, ...]:
        """Emit message fragments in order; return the collected errors."""
        state = ResolutionState(max_depth=self.context.max_depth)
        self._emit_parts(message.parts, args, state, emit)
        if state.errors:
            logger.debug(
                "Resolved message with %d error(s): %s",
                len(state.errors),
                ", ".join(type(e).__name__ for e in state.errors),
            )
        return tuple(state.errors)

    def _emit_parts(
        self,
        parts: Sequence[MessagePart],
        args: Args,
        state: ResolutionState,
        emit: Emit,
    ) -> None:
        for part in parts:
            match part:
                case Literal(text=text):
                    if text:
                        emit(text)
                case ArgumentRef():
                    emit(self._resolve_argument(part, args, state))
                case Placeholder():
                    emit(self._resolve_placeholder(state))
                case PluralSelect():
                    self._resolve_plural(part, args, state, emit)
                case Select():
                    self._resolve_select(part, args, state, emit)
                case _:
                    state.record(
                        MessageFormatError(ErrorTemplate.unknown_part(type(part).__name__))
                    )
                    emit(FALLBACK_INVALID)

    def _lookup(
        self, key: ArgumentKey, args: Args, state: ResolutionState, fallback: str
    ) -> tuple[Value | None, str]:
        """Look up an argument; on absence, record the error and pick the fallback."""
        value = args.get(key)
        if value is not None:
            return value, fallback
        state.record(MissingArgumentError(ErrorTemplate.missing_argument(key)))
        if self.context.missing_arguments is MissingArgumentPolicy.SKIP:
            return None, ""
        return None, fallback

    def _resolve_argument(self, part: ArgumentRef, args: Args, state: ResolutionState) -> str:
        fallback = FALLBACK_ARGUMENT.format(name=part.key)
        value, fallback = self._lookup(part.key, args, state, fallback)
        if value is None:
            return fallback
        try:
            return self._format_value(part, value)
        except TypeMismatchError as e:
            state.record(e)
            return fallback
        except FormattingError as e:
            state.record(e)
            return e.fallback_value

    def _format_value(self, part: ArgumentRef, value: Value) -> str:
        """Format one argument value according to the part's hint.

        Raises:
            TypeMismatchError: If the value's kind does not suit the hint
            FormattingError: If Babel or a caller object cannot format the value
        """
        match part.hint:
            case None:
                if value.is_string:
                    return value.as_str()
                if value.is_number:
                    return self.context.format_number(value.as_number(), style=part.style)
                return self._format_opaque(part, value)
            case FormatHint.NUMBER:
                if not value.is_number:
                    raise TypeMismatchError(
                        ErrorTemplate.type_mismatch(part.key, "number", value.kind)
                    )
                return self.context.format_number(value.as_number(), style=part.style)
            case _:
                raw = value.raw
                if not isinstance(raw, _TEMPORAL_TYPES[part.hint]):
                    raise TypeMismatchError(
                        ErrorTemplate.type_mismatch(part.key, part.hint, type(raw).__name__)
                    )
                return self.context.format_datetime(raw, part.hint, style=part.style)

    def _format_opaque(self, part: ArgumentRef, value: Value) -> str:
        """Render a caller-supplied object; its TypeError or ValueError is collected."""
        raw = value.raw
        try:
            if isinstance(raw, Formattable):
                return raw.format_for(self.context)
            return str(value)
        except (TypeError, ValueError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed(type(raw).__name__, part.key, str(e)),
                fallback_value=FALLBACK_ARGUMENT.format(name=part.key),
            ) from e

    def _resolve_placeholder(self, state: ResolutionState) -> str:
        number = state.plural_value
        if number is None:
            state.record(MessageFormatError(ErrorTemplate.placeholder_outside_plural()))
            return FALLBACK_PLACEHOLDER
        try:
            return self.context.format_number(number)
        except FormattingError as e:
            state.record(e)
            return e.fallback_value

    def _resolve_plural(
        self, part: PluralSelect, args: Args, state: ResolutionState, emit: Emit
    ) -> None:
        """Select and emit a plural branch.

        Matching priority:
            1. Exact branch equal to the raw value (before offset)
            2. Category of value - offset under the context's rules
            3. 'other'
        """
        kind = _plural_kind(part.plural_type)
        fallback = FALLBACK_PLURAL.format(name=part.key, kind=kind)
        value, fallback = self._lookup(part.key, args, state, fallback)
        if value is None:
            emit(fallback)
            return
        if not value.is_number:
            state.record(TypeMismatchError(ErrorTemplate.type_mismatch(part.key, "number", value.kind)))
            emit(fallback)
            return

        number = value.as_number()
        adjusted = _apply_offset(number, part.offset)

        branch = _find_exact(part.exact_index, number)
        if branch is None:
            category, diagnostic = self.context.classify_checked(
                adjusted, plural_type=part.plural_type
            )
            if diagnostic is not None:
                state.record(MessageFormatError(diagnostic))
            branch = part.category_index.get(category)
            if branch is None:
                branch = part.category_index.get(PluralCategory.OTHER)
            if branch is None:
                state.record(
                    NoMatchingBranchError(ErrorTemplate.no_matching_branch(part.key, category, kind))
                )
                return

        self._emit_branch(branch, args, state, emit, adjusted)

    def _resolve_select(self, part: Select, args: Args, state: ResolutionState, emit: Emit) -> None:
        fallback = FALLBACK_SELECT.format(name=part.key)
        value, fallback = self._lookup(part.key, args, state, fallback)
        if value is None:
            emit(fallback)
            return
        if not value.is_string:
            state.record(TypeMismatchError(ErrorTemplate.type_mismatch(part.key, "string", value.kind)))
            emit(fallback)
            return

        selector = value.as_str()
        branch = part.index.get(selector)
        if branch is None:
            branch = part.index.get(OTHER_KEY)
        if branch is None:
            state.record(
                NoMatchingBranchError(ErrorTemplate.no_matching_branch(part.key, selector, "select"))
            )
            return

        self._emit_branch(branch, args, state, emit, None)

    def _emit_branch(
        self,
        branch: Message,
        args: Args,
        state: ResolutionState,
        emit: Emit,
        plural_value: PluralNumber | None,
    ) -> None:
        try:
            with state.branch(plural_value):
                self._emit_parts(branch.parts, args, state, emit)
        except DepthLimitExceededError as e:
            # Only the branch that could not be entered is dropped
            state.record(e)
