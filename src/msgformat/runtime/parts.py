"""Message parts: the closed set of node types a Message is built from.

Every part is a frozen, hashable dataclass. A Message is an ordered tuple of
parts; plural and select parts own their branch Messages, so a message
forms a finite tree with no shared mutable state.

    Literal       fixed text
    ArgumentRef   value of a named or positional argument
    Placeholder   '#' inside a plural branch (plural value minus offset)
    PluralSelect  branch chosen by plural category or exact number
    Select        branch chosen by string equality

Branch lookups use read-only indices built once in __post_init__; they do
not take part in equality or hashing.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from msgformat.constants import OTHER_KEY
from msgformat.enums import FormatHint, PluralCategory, PluralType

from .value import ArgumentKey, check_argument_key

if TYPE_CHECKING:
    from .message import Message

__all__ = [
    "ArgumentRef",
    "ExactKey",
    "Literal",
    "MessagePart",
    "Placeholder",
    "PluralSelect",
    "Select",
]

ExactKey: TypeAlias = "int | Decimal"


def _as_message(branch: Message | str) -> Message:
    # Deferred: message.py imports this module
    from .message import Message  # noqa: PLC0415 - circular import

    if isinstance(branch, Message):
        return branch
    if isinstance(branch, str):
        return Message.text(branch)
    msg = f"Branch must be Message or str, got {type(branch).__name__}"
    raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class Literal:
    """Fixed text emitted verbatim."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            msg = f"Literal text must be str, got {type(self.text).__name__}"
            raise TypeError(msg)


@dataclass(frozen=True, slots=True)
class ArgumentRef:
    """Reference to an argument, with an optional formatting hint.

    Attributes:
        key: Argument name or positional index
        hint: How to format the value (number, date, time, datetime);
            None formats by the value's kind
        style: Style for the hint: "integer" / "percent" / a decimal
            pattern for numbers; "short" ... "full" / a pattern for dates
    """

    key: ArgumentKey
    hint: FormatHint | None = None
    style: str | None = None

    def __post_init__(self) -> None:
        check_argument_key(self.key)
        if self.hint is not None:
            object.__setattr__(self, "hint", FormatHint(self.hint))


@dataclass(frozen=True, slots=True)
class Placeholder:
    """The '#' of a plural branch.

    Renders the enclosing plural's value minus its offset as a locale
    number. Outside any plural it renders '#' and reports an error.
    """


@dataclass(frozen=True, slots=True)
class PluralSelect:
    """Branch selection by plural category of a numeric argument.

    Exact branches (ICU '=N') are compared with the raw argument value, before
    the offset is applied, and win over category branches. Category selection
    classifies value - offset. This follows ICU MessageFormat; some Rust
    message-format crates instead match '=N' against value - offset, so with
    offset:1 and count=2 the branch '=1' is taken there but '=2' here.

    Attributes:
        key: Argument holding the number
        branches: (category, Message) pairs
        exact: (number, Message) pairs for exact-value overrides
        offset: Subtracted from the value before classification and for '#'
        plural_type: Cardinal (plural) or ordinal (selectordinal)

    Example:
        >>> items = PluralSelect.create(
        ...     "count", one=Message.of(Placeholder(), " item"),
        ...     other=Message.of(Placeholder(), " items"), exact={0: "no items"},
        ... )
    """

    key: ArgumentKey
    branches: tuple[tuple[PluralCategory, Message], ...]
    exact: tuple[tuple[ExactKey, Message], ...] = ()
    offset: int = 0
    plural_type: PluralType = PluralType.CARDINAL
    category_index: Mapping[PluralCategory, Message] = field(
        init=False, repr=False, compare=False
    )
    exact_index: Mapping[ExactKey, Message] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        check_argument_key(self.key)
        if isinstance(self.offset, bool) or not isinstance(self.offset, int):
            msg = f"Plural offset must be int, got {type(self.offset).__name__}"
            raise TypeError(msg)

        categories: dict[PluralCategory, Message] = {}
        for category, branch in self.branches:
            category = PluralCategory(category)
            if category in categories:
                msg = f"Duplicate plural branch: {category}"
                raise ValueError(msg)
            categories[category] = branch

        exact: dict[ExactKey, Message] = {}
        for number, branch in self.exact:
            if isinstance(number, bool) or not isinstance(number, (int, Decimal)):
                msg = f"Exact branch key must be int or Decimal, got {type(number).__name__}"
                raise TypeError(msg)
            if number in exact:
                msg = f"Duplicate exact branch: ={number}"
                raise ValueError(msg)
            exact[number] = branch

        object.__setattr__(self, "plural_type", PluralType(self.plural_type))
        object.__setattr__(self, "category_index", MappingProxyType(categories))
        object.__setattr__(self, "exact_index", MappingProxyType(exact))

    @classmethod
    def create(
        cls,
        key: ArgumentKey,
        *,
        other: Message | str | None = None,
        zero: Message | str | None = None,
        one: Message | str | None = None,
        two: Message | str | None = None,
        few: Message | str | None = None,
        many: Message | str | None = None,
        exact: Mapping[ExactKey, Message | str] | None = None,
        offset: int = 0,
        ordinal: bool = False,
    ) -> PluralSelect:
        """Build a PluralSelect from keyword branches.

        Branches may be Messages or plain strings (taken as literal text).
        Omitted categories are simply absent; a select without 'other' is
        legal but reported by validate_message().
        """
        given = {
            PluralCategory.ZERO: zero,
            PluralCategory.ONE: one,
            PluralCategory.TWO: two,
            PluralCategory.FEW: few,
            PluralCategory.MANY: many,
            PluralCategory.OTHER: other,
        }
        return cls(
            key=key,
            branches=tuple(
                (category, _as_message(branch))
                for category, branch in given.items()
                if branch is not None
            ),
            exact=tuple((number, _as_message(branch)) for number, branch in (exact or {}).items()),
            offset=offset,
            plural_type=PluralType.ORDINAL if ordinal else PluralType.CARDINAL,
        )

    @property
    def other(self) -> Message | None:
        """The mandatory-by-convention 'other' branch, if present."""
        return self.category_index.get(PluralCategory.OTHER)


@dataclass(frozen=True, slots=True)
class Select:
    """Branch selection by string equality (ICU select).

    The 'other' branch, when present, catches every unmatched value.

    Example:
        >>> Select.create("gender", female="her", male="his", other="their")
    """

    key: ArgumentKey
    branches: tuple[tuple[str, Message], ...]
    index: Mapping[str, Message] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        check_argument_key(self.key)
        index: dict[str, Message] = {}
        for selector, branch in self.branches:
            if not isinstance(selector, str):
                msg = f"Select branch key must be str, got {type(selector).__name__}"
                raise TypeError(msg)
            if selector in index:
                msg = f"Duplicate select branch: {selector!r}"
                raise ValueError(msg)
            index[selector] = branch
        object.__setattr__(self, "index", MappingProxyType(index))

    @classmethod
    def create(
        cls, key: ArgumentKey, /, *, other: Message | str | None = None, **branches: Message | str
    ) -> Select:
        """Build a Select from keyword branches; 'other' is listed last."""
        if other is not None:
            branches[OTHER_KEY] = other
        return cls.from_mapping(key, branches)

    @classmethod
    def from_mapping(cls, key: ArgumentKey, branches: Mapping[str, Message | str]) -> Select:
        """Build a Select from a mapping; needed for keys that are not identifiers."""
        return cls(
            key=key,
            branches=tuple((selector, _as_message(branch)) for selector, branch in branches.items()),
        )

    @property
    def other(self) -> Message | None:
        """The fallback branch, if present."""
        return self.index.get(OTHER_KEY)


MessagePart: TypeAlias = "Literal | ArgumentRef | Placeholder | PluralSelect | Select"
