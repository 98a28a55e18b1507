"""Formatting context: locale, plural rules and options for a pass.

A Context is resolved once (locale -> plural classifiers, Babel locale) and
then threaded read-only through every part of a formatting pass. It never
changes after construction, so one Context can serve any number of
concurrent format calls for the same locale.

Architecture:
    - Context: Immutable configuration container (frozen dataclass)
    - NumberOptions: Immutable number formatting options
    - Formatters use Babel (thread-safe, CLDR-based)
    - No dependency on Python's locale module (avoids global state)

Python 3.13+. Uses Babel for i18n.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Protocol

from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from babel.core import UnknownLocaleError as BabelUnknownLocaleError

from msgformat.constants import DEFAULT_LOCALE, MAX_DEPTH
from msgformat.diagnostics import Diagnostic, ErrorTemplate, FormattingError, UnknownLocaleError
from msgformat.enums import FormatHint, MissingArgumentPolicy, PluralCategory, PluralType
from msgformat.locale_utils import base_language, get_babel_locale, normalize_locale

from .plural_rules import (
    PluralNumber,
    PluralRuleRegistry,
    ResolvedClassifier,
    checked_classify,
    get_shared_registry,
    safe_classify,
)

if TYPE_CHECKING:
    from .args import Args
    from .message import Message
    from .value import ArgumentKey

__all__ = ["Context", "NumberOptions", "TextSink"]

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    """Anything with a write(str) method: io.StringIO, an open text file, sys.stdout."""

    def write(self, text: str, /) -> object:
        ...  # pragma: no cover  # Protocol stub - not executable


@dataclass(frozen=True, slots=True)
class NumberOptions:
    """Number formatting options applied to numeric arguments.

    Attributes:
        use_grouping: Use the locale's grouping separator (1,234)
        minimum_fraction_digits: Minimum decimal places
        maximum_fraction_digits: Maximum decimal places

    Raises:
        ValueError: If digit counts are negative or minimum exceeds maximum
    """

    use_grouping: bool = True
    minimum_fraction_digits: int = 0
    maximum_fraction_digits: int = 3

    def __post_init__(self) -> None:
        """Validate digit bounds."""
        if self.minimum_fraction_digits < 0 or self.maximum_fraction_digits < 0:
            msg = "Fraction digit counts must be >= 0"
            raise ValueError(msg)
        if self.minimum_fraction_digits > self.maximum_fraction_digits:
            msg = (
                f"minimum_fraction_digits ({self.minimum_fraction_digits}) exceeds "
                f"maximum_fraction_digits ({self.maximum_fraction_digits})"
            )
            raise ValueError(msg)

    @property
    def pattern(self) -> str:
        """CLDR decimal pattern equivalent to these options.

        '#,##0' = integer with grouping
        '#,##0.0##' = 1-3 decimal places with grouping
        '0.00' = exactly 2 decimal places, no grouping
        """
        integer_part = "#,##0" if self.use_grouping else "0"
        if self.maximum_fraction_digits == 0:
            return integer_part
        required = "0" * self.minimum_fraction_digits
        optional = "#" * (self.maximum_fraction_digits - self.minimum_fraction_digits)
        return f"{integer_part}.{required}{optional}"


@dataclass(frozen=True, slots=True)
class Context:
    """Immutable per-call configuration for formatting.

    Use Context.create() to construct; it resolves the locale's plural
    classifiers and Babel locale once.

    Attributes:
        locale_code: Locale as requested by the caller (preserved for debugging)
        cardinal: Resolved cardinal classifier
        ordinal: Resolved ordinal classifier
        number_options: Number formatting options
        missing_arguments: Rendering policy for absent arguments
        max_depth: Maximum plural/select nesting depth per pass
        is_fallback: True when the locale was unknown and defaults were used
        diagnostics: Construction-time warnings (e.g. UNKNOWN_LOCALE)

    Examples:
        >>> ctx = Context.create("lv-LV")
        >>> ctx.classify(0)
        <PluralCategory.ZERO: 'zero'>

        >>> ctx = Context.create("xx-UNKNOWN")
        >>> ctx.is_fallback
        True
    """

    locale_code: str
    cardinal: ResolvedClassifier
    ordinal: ResolvedClassifier
    _babel_locale: Locale = field(repr=False)
    number_options: NumberOptions = field(default_factory=NumberOptions)
    missing_arguments: MissingArgumentPolicy = MissingArgumentPolicy.PLACEHOLDER
    max_depth: int = MAX_DEPTH
    is_fallback: bool = False
    diagnostics: tuple[Diagnostic, ...] = ()

    @classmethod
    def create(
        cls,
        locale_code: str = DEFAULT_LOCALE,
        *,
        registry: PluralRuleRegistry | None = None,
        number_options: NumberOptions | None = None,
        missing_arguments: MissingArgumentPolicy = MissingArgumentPolicy.PLACEHOLDER,
        max_depth: int = MAX_DEPTH,
    ) -> Context:
        """Create a Context with graceful fallback for unknown locales.

        This method always succeeds: for an unknown locale it logs a warning,
        uses the fallback (English) rules, sets is_fallback and records an
        UNKNOWN_LOCALE diagnostic. Use create_or_raise() for strict checking.

        Args:
            locale_code: BCP-47 locale identifier (e.g., 'en-US', 'lv-LV')
            registry: Plural classifier registry (default: shared registry)
            number_options: Number formatting options
            missing_arguments: Rendering policy for absent arguments
            max_depth: Maximum plural/select nesting depth

        Returns:
            Context instance
        """
        registry = get_shared_registry() if registry is None else registry
        cardinal = registry.resolve(locale_code, PluralType.CARDINAL)
        ordinal = registry.resolve(locale_code, PluralType.ORDINAL)

        babel_locale = _load_babel_locale(locale_code, registry.fallback_locale)

        # A locale with registered rules is known even when Babel lacks data for it
        is_fallback = cardinal.is_fallback
        diagnostics: tuple[Diagnostic, ...] = ()
        if is_fallback:
            logger.warning(
                "Unknown locale '%s'. Falling back to '%s'", locale_code, cardinal.locale_key
            )
            diagnostics = (ErrorTemplate.unknown_locale(locale_code, cardinal.locale_key),)

        return cls(
            locale_code=locale_code,
            cardinal=cardinal,
            ordinal=ordinal,
            _babel_locale=babel_locale,
            number_options=number_options or NumberOptions(),
            missing_arguments=MissingArgumentPolicy(missing_arguments),
            max_depth=max_depth,
            is_fallback=is_fallback,
            diagnostics=diagnostics,
        )

    @classmethod
    def create_or_raise(cls, locale_code: str, **options: object) -> Context:
        """Create a Context or raise if the locale is unknown.

        Raises:
            UnknownLocaleError: If the locale has no plural rules of its own
        """
        context = cls.create(locale_code, **options)  # type: ignore[arg-type]
        if context.is_fallback:
            raise UnknownLocaleError(context.diagnostics[0])
        return context

    @classmethod
    def default(cls) -> Context:
        """Shared English context used when format() receives no context."""
        return _default_context()

    @property
    def babel_locale(self) -> Locale:
        """Babel Locale used for number and date formatting."""
        return self._babel_locale

    @property
    def normalized_locale(self) -> str:
        """POSIX form of locale_code (en_US)."""
        return normalize_locale(self.locale_code)

    def classify(
        self, value: PluralNumber, *, plural_type: PluralType = PluralType.CARDINAL
    ) -> PluralCategory:
        """Plural category of value under this context's rules. Total."""
        resolved = self.ordinal if plural_type is PluralType.ORDINAL else self.cardinal
        return safe_classify(resolved.classifier, value)

    def classify_checked(
        self, value: PluralNumber, *, plural_type: PluralType = PluralType.CARDINAL
    ) -> tuple[PluralCategory, Diagnostic | None]:
        """classify(), plus an INVALID_PLURAL_CATEGORY diagnostic for a bad classifier."""
        resolved = self.ordinal if plural_type is PluralType.ORDINAL else self.cardinal
        return checked_classify(resolved.classifier, value, resolved.locale_key)

    def format_number(self, value: int | float | Decimal, *, style: str | None = None) -> str:
        """Format number with locale-specific separators.

        Args:
            value: Number to format
            style: None (NumberOptions), "integer", "percent", or a CLDR
                decimal pattern such as "#,##0.00"

        Returns:
            Formatted number string

        Raises:
            FormattingError: If Babel cannot format the value; carries
                str(value) as fallback

        Examples:
            >>> Context.create("en-US").format_number(1234.5)
            '1,234.5'
            >>> Context.create("de-DE").format_number(1234.5)
            '1.234,5'
            >>> Context.create("en").format_number(0.25, style="percent")
            '25%'
        """
        try:
            if style == "percent":
                return str(babel_numbers.format_percent(value, locale=self._babel_locale))
            if style == "integer":
                pattern = "#,##0" if self.number_options.use_grouping else "0"
            elif style is not None:
                pattern = style
            else:
                pattern = self.number_options.pattern
                if self.number_options.maximum_fraction_digits == 0:
                    value = round(value)
            return str(babel_numbers.format_decimal(value, format=pattern, locale=self._babel_locale))
        except (ValueError, TypeError, InvalidOperation, OverflowError, AttributeError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed("number", value, str(e)), fallback_value=str(value)
            ) from e

    def format_datetime(
        self,
        value: date | time | datetime,
        hint: FormatHint = FormatHint.DATETIME,
        *,
        style: str | None = None,
    ) -> str:
        """Format a date, time, or datetime.

        Args:
            value: Temporal value
            hint: DATE, TIME or DATETIME
            style: "short", "medium" (default), "long", "full", or a CLDR pattern

        Returns:
            Formatted string according to locale rules

        Raises:
            FormattingError: If Babel cannot format the value; carries
                value.isoformat() as fallback

        Examples:
            >>> ctx = Context.create("en-US")
            >>> ctx.format_datetime(date(2025, 10, 27), FormatHint.DATE, style="short")
            '10/27/25'
        """
        fmt = style or "medium"
        try:
            match hint:
                case FormatHint.DATE:
                    return str(babel_dates.format_date(value, format=fmt, locale=self._babel_locale))
                case FormatHint.TIME:
                    return str(babel_dates.format_time(value, format=fmt, locale=self._babel_locale))
                case _:
                    return str(
                        babel_dates.format_datetime(value, format=fmt, locale=self._babel_locale)
                    )
        except (ValueError, TypeError, OverflowError, AttributeError, KeyError) as e:
            raise FormattingError(
                ErrorTemplate.formatting_failed(str(hint), value, str(e)),
                fallback_value=value.isoformat(),
            ) from e

    def format(
        self, message: Message, args: Args | dict[ArgumentKey, object] | None = None
    ) -> str:
        """Format message under this context (see Message.format)."""
        return message.format(args, self)

    def write(
        self,
        message: Message,
        sink: TextSink,
        args: Args | dict[ArgumentKey, object] | None = None,
    ) -> tuple[Exception, ...]:
        """Stream message into sink under this context (see Message.write)."""
        return message.write(sink, args, self)


def _load_babel_locale(locale_code: str, fallback_locale: str) -> Locale:
    """Babel locale for locale_code, its base language, or the fallback locale."""
    candidates = dict.fromkeys((locale_code, base_language(locale_code), fallback_locale))
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return get_babel_locale(candidate)
        except (BabelUnknownLocaleError, ValueError) as e:
            logger.debug("Babel has no data for locale '%s': %s", candidate, e)
    return get_babel_locale(DEFAULT_LOCALE)


@functools.cache
def _default_context() -> Context:
    return Context.create(DEFAULT_LOCALE)
