"""Tests for runtime/context.py - locale resolution and Babel formatting.

Coverage:
    - Locale resolution with graceful fallback and diagnostics
    - NumberOptions validation and patterns
    - Number, percent, date and time formatting through Babel
    - FormattingError fallbacks
"""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest

from msgformat import Context, FormatHint, FormattingError, MissingArgumentPolicy, NumberOptions
from msgformat.diagnostics import DiagnosticCode, UnknownLocaleError
from msgformat.enums import PluralCategory, PluralType
from msgformat.runtime.plural_rules import PluralRuleRegistry, create_default_registry


class TestCreate:
    """Context.create resolves a locale once and never raises."""

    def test_known_locale(self) -> None:
        """Known locales are not fallbacks and carry no diagnostics."""
        ctx = Context.create("lv-LV")
        assert not ctx.is_fallback
        assert ctx.diagnostics == ()
        assert ctx.normalized_locale == "lv_LV"
        assert ctx.babel_locale.language == "lv"

    def test_default_is_english(self) -> None:
        """No argument means English."""
        ctx = Context.create()
        assert ctx.locale_code == "en"
        assert ctx.classify(1) is PluralCategory.ONE

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales use English rules, warn, and record a diagnostic."""
        with caplog.at_level(logging.WARNING, logger="msgformat.runtime.context"):
            ctx = Context.create("xx-UNKNOWN")
        assert ctx.is_fallback
        assert ctx.classify(1) is PluralCategory.ONE
        assert ctx.babel_locale.language == "en"
        assert len(ctx.diagnostics) == 1
        assert ctx.diagnostics[0].code is DiagnosticCode.UNKNOWN_LOCALE
        assert ctx.diagnostics[0].severity == "warning"
        assert "xx-UNKNOWN" in caplog.text

    def test_empty_locale_falls_back(self) -> None:
        """An empty locale code is just another unknown locale."""
        assert Context.create("").is_fallback

    def test_unknown_region_uses_language(self) -> None:
        """A region Babel lacks still gets the language's data."""
        ctx = Context.create("de-XX")
        assert not ctx.is_fallback
        assert ctx.babel_locale.language == "de"
        assert ctx.format_number(1234.5) == "1.234,5"

    def test_registered_locale_without_babel_data(self) -> None:
        """Rules registered by the caller make a locale known."""
        registry = create_default_registry()
        registry.register("xx", lambda n: PluralCategory.FEW if n == 3 else PluralCategory.OTHER)
        ctx = Context.create("xx", registry=registry)
        assert not ctx.is_fallback
        assert ctx.classify(3) is PluralCategory.FEW

    def test_empty_registry_is_used(self) -> None:
        """An empty registry is still the registry consulted, not the shared one."""
        ctx = Context.create("pl", registry=PluralRuleRegistry(use_cldr=False))
        assert ctx.is_fallback
        assert ctx.diagnostics[0].code is DiagnosticCode.UNKNOWN_LOCALE
        assert ctx.classify(2) is PluralCategory.OTHER

    def test_create_or_raise(self) -> None:
        """Strict construction rejects unknown locales."""
        assert Context.create_or_raise("pl").locale_code == "pl"
        with pytest.raises(ValueError, match="xx"):
            Context.create_or_raise("xx")

    def test_create_or_raise_error_type(self) -> None:
        """The strict error carries the UNKNOWN_LOCALE diagnostic."""
        with pytest.raises(UnknownLocaleError) as exc_info:
            Context.create_or_raise("xx-YY")
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.UNKNOWN_LOCALE
        assert exc_info.value.diagnostic.locale_code == "xx-YY"

    def test_options(self) -> None:
        """Keyword options are stored."""
        ctx = Context.create(
            "en",
            number_options=NumberOptions(maximum_fraction_digits=0),
            missing_arguments=MissingArgumentPolicy.SKIP,
            max_depth=5,
        )
        assert ctx.number_options.maximum_fraction_digits == 0
        assert ctx.missing_arguments is MissingArgumentPolicy.SKIP
        assert ctx.max_depth == 5

    def test_immutable(self) -> None:
        """Context cannot be modified after construction."""
        ctx = Context.create("en")
        with pytest.raises(AttributeError):
            ctx.locale_code = "de"  # type: ignore[misc]

    def test_default_context_cached(self) -> None:
        """Context.default() returns one shared English context."""
        assert Context.default() is Context.default()
        assert Context.default().locale_code == "en"


class TestClassify:
    """Context.classify uses the resolved classifiers."""

    def test_cardinal_and_ordinal(self) -> None:
        """Both rule sets are resolved at construction."""
        ctx = Context.create("en")
        assert ctx.classify(2) is PluralCategory.OTHER
        assert ctx.classify(2, plural_type=PluralType.ORDINAL) is PluralCategory.TWO

    def test_non_finite(self) -> None:
        """Classification stays total."""
        assert Context.create("pl").classify(float("nan")) is PluralCategory.OTHER


class TestNumberOptions:
    """NumberOptions validation and CLDR pattern."""

    def test_defaults(self) -> None:
        """Grouping on, up to three fraction digits."""
        assert NumberOptions().pattern == "#,##0.###"

    def test_fixed_fraction(self) -> None:
        """min == max gives fixed decimals."""
        options = NumberOptions(use_grouping=False, minimum_fraction_digits=2, maximum_fraction_digits=2)
        assert options.pattern == "0.00"

    def test_integer_only(self) -> None:
        """No fraction digits."""
        assert NumberOptions(maximum_fraction_digits=0).pattern == "#,##0"

    @pytest.mark.parametrize(("minimum", "maximum"), [(-1, 3), (0, -1), (4, 2)])
    def test_invalid(self, minimum: int, maximum: int) -> None:
        """Negative or inverted bounds are rejected."""
        with pytest.raises(ValueError):
            NumberOptions(minimum_fraction_digits=minimum, maximum_fraction_digits=maximum)


class TestFormatNumber:
    """Locale-aware number formatting via Babel."""

    @pytest.mark.parametrize(
        ("locale", "value", "expected"),
        [
            ("en-US", 1234.5, "1,234.5"),
            ("en-US", 1234567, "1,234,567"),
            ("en-US", 5, "5"),
            ("en-US", -42, "-42"),
            ("en-US", Decimal("3.14159"), "3.142"),
            ("de-DE", 1234.5, "1.234,5"),
        ],
    )
    def test_default_options(self, locale: str, value: int | float | Decimal, expected: str) -> None:
        """Grouping and decimal separators follow the locale."""
        assert Context.create(locale).format_number(value) == expected

    def test_no_grouping(self) -> None:
        """Grouping can be disabled."""
        ctx = Context.create("en", number_options=NumberOptions(use_grouping=False))
        assert ctx.format_number(1234567) == "1234567"

    def test_minimum_fraction_digits(self) -> None:
        """Trailing zeros up to the minimum."""
        ctx = Context.create("en", number_options=NumberOptions(minimum_fraction_digits=2))
        assert ctx.format_number(5) == "5.00"

    def test_integer_style(self, en: Context) -> None:
        """'integer' style drops the fraction."""
        assert en.format_number(1234, style="integer") == "1,234"

    def test_percent_style(self, en: Context) -> None:
        """'percent' style scales by 100."""
        assert en.format_number(0.25, style="percent") == "25%"

    def test_pattern_style(self, en: Context) -> None:
        """Any other style is a CLDR decimal pattern."""
        assert en.format_number(3.5, style="#,##0.00") == "3.50"

    def test_failure_raises_with_fallback(self, en: Context) -> None:
        """Values Babel cannot handle raise FormattingError carrying str(value)."""
        with pytest.raises(FormattingError) as exc_info:
            en.format_number("abc")  # type: ignore[arg-type]
        assert exc_info.value.fallback_value == "abc"
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.FORMATTING_FAILED


class TestFormatDatetime:
    """Locale-aware date and time formatting via Babel."""

    def test_short_date(self, en_us: Context) -> None:
        """CLDR short date for en-US."""
        assert en_us.format_datetime(date(2025, 10, 27), FormatHint.DATE, style="short") == "10/27/25"

    def test_medium_date_default(self, en_us: Context) -> None:
        """Medium width is the default."""
        assert en_us.format_datetime(date(2025, 10, 27), FormatHint.DATE) == "Oct 27, 2025"

    def test_german_date(self) -> None:
        """Date order and separators follow the locale."""
        ctx = Context.create("de-DE")
        assert ctx.format_datetime(date(2025, 10, 27), FormatHint.DATE, style="short") == "27.10.25"

    def test_pattern(self, en_us: Context) -> None:
        """Non-width styles are CLDR patterns."""
        assert en_us.format_datetime(date(2025, 1, 5), FormatHint.DATE, style="yyyy-MM-dd") == (
            "2025-01-05"
        )

    def test_time(self, en_us: Context) -> None:
        """Times are formatted with the locale's time pattern."""
        result = en_us.format_datetime(time(14, 30), FormatHint.TIME, style="short")
        assert "2:30" in result
        assert "PM" in result

    def test_datetime(self, en_us: Context) -> None:
        """Datetimes combine date and time."""
        value = datetime(2025, 10, 27, 14, 30, tzinfo=UTC)
        result = en_us.format_datetime(value, FormatHint.DATETIME, style="medium")
        assert "Oct 27, 2025" in result
        assert "2:30" in result

    def test_failure_raises_with_isoformat_fallback(self, en_us: Context) -> None:
        """Babel failures carry the ISO representation as fallback."""
        with pytest.raises(FormattingError) as exc_info:
            en_us.format_datetime(time(14, 30), FormatHint.DATE, style="short")
        assert exc_info.value.fallback_value == "14:30:00"
